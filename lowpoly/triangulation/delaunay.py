import warnings
import numpy as np
from scipy.spatial import Delaunay, QhullError

from ..errors import TriangulationError
from .base import Triangulation, Triangulator


class DelaunayTriangulator(Triangulator):
    """Delaunay triangulation backed by Qhull."""

    def __init__(self, qhull_options: str = None):
        """
        Args:
            qhull_options: Extra options passed to Qhull, None for scipy defaults
        """
        self.qhull_options = qhull_options

    def triangulate(self, points: np.ndarray, with_neighbors: bool = False) -> Triangulation:
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise TriangulationError(f"Expected points of shape (M, 2), got {points.shape}")
        if len(points) < 3:
            raise TriangulationError(f"At least 3 points are needed, got {len(points)}")
        if not np.all(np.isfinite(points)):
            raise TriangulationError("Points contain NaN or Inf values")
        
        try:
            tri = Delaunay(points, qhull_options=self.qhull_options)
        except (QhullError, ValueError) as exc:
            raise TriangulationError(f"Delaunay triangulation failed: {exc}") from exc
        
        # Qhull leaves out duplicated points
        if len(tri.coplanar):
            warnings.warn(f"{len(tri.coplanar)} duplicate points were left out of the triangulation")
        
        return Triangulation(
            points=points,
            faces=tri.simplices,
            neighbors=tri.neighbors if with_neighbors else None,
        )
