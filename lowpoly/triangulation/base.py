from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import numpy as np

from ..errors import TriangulationError


@dataclass
class Triangulation:
    """
    Faces of a planar triangulation.
    
    Attributes:
        points: Input points (M, 2)
        faces: Vertex indices into points (N, 3)
        neighbors: Optional face adjacency (N, 3); -1 marks a hull edge
    """
    points: np.ndarray
    faces: np.ndarray
    neighbors: Optional[np.ndarray] = None

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=np.float64)
        self.faces = np.asarray(self.faces, dtype=np.int64).reshape(-1, 3)
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= len(self.points)):
            raise TriangulationError("Triangulation references a point that does not exist")
        if self.neighbors is not None:
            self.neighbors = np.asarray(self.neighbors, dtype=np.int64)
            if len(self.neighbors) != len(self.faces):
                raise TriangulationError(
                    f"Neighbor relation has {len(self.neighbors)} rows for {len(self.faces)} faces")

    def __len__(self) -> int:
        return len(self.faces)

    def face_vertices(self, face_index: int) -> np.ndarray:
        """Coordinates (3, 2) of one face."""
        return self.points[self.faces[face_index]]

    def face_neighbors(self, face_index: int) -> np.ndarray:
        """Indices of the faces sharing an edge with face_index."""
        if self.neighbors is None:
            raise TriangulationError("Triangulation was computed without neighbors")
        row = self.neighbors[face_index]
        return row[(row >= 0) & (row < len(self.faces))]


class Triangulator(ABC):
    """Computes a planar triangulation of a 2D point set."""

    @abstractmethod
    def triangulate(self, points: np.ndarray, with_neighbors: bool = False) -> Triangulation:
        """
        Triangulate points.
        
        Args:
            points: Point set (M, 2)
            with_neighbors: Whether to also compute face adjacency
            
        Returns:
            Triangulation covering the convex hull of points
            
        Raises:
            TriangulationError: If no triangulation can be produced
        """
