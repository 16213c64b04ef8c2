from .rng import make_rng
from .geometry import triangle_area, triangle_centroid, within_bounds, barycentric_mask

__all__ = [
    'make_rng',
    'triangle_area',
    'triangle_centroid',
    'within_bounds',
    'barycentric_mask'
]
