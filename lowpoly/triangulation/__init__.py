from ..errors import InvalidInputError
from .base import Triangulation, Triangulator
from .delaunay import DelaunayTriangulator


TRIANGULATORS = {
    'delaunay': DelaunayTriangulator,
}


def create_triangulator(method: str = 'delaunay') -> Triangulator:
    """Create a triangulator by name."""
    if method not in TRIANGULATORS:
        choices = ', '.join(sorted(TRIANGULATORS))
        raise InvalidInputError(f"Unknown triangulation method '{method}' (expected one of: {choices})")
    return TRIANGULATORS[method]()


__all__ = [
    'Triangulation',
    'Triangulator',
    'DelaunayTriangulator',
    'create_triangulator'
]
