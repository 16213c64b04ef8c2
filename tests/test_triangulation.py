import pytest
import numpy as np

from lowpoly.errors import InvalidInputError, TriangulationError
from lowpoly.triangulation import (
    DelaunayTriangulator, Triangulation, create_triangulator
)


class TestDelaunayTriangulator:
    """Test cases for the Qhull-backed triangulator."""
    
    def test_square(self):
        """Test that four corners give two faces sharing an edge."""
        points = np.array([[0, 0], [10, 0], [0, 10], [10, 10]], dtype=float)
        tri = DelaunayTriangulator().triangulate(points, with_neighbors=True)
        
        assert len(tri) == 2
        assert tri.faces.shape == (2, 3)
        assert list(tri.face_neighbors(0)) == [1]
        assert list(tri.face_neighbors(1)) == [0]
    
    def test_covers_hull(self):
        """Test that face areas add up to the hull area."""
        rng = np.random.default_rng(0)
        points = np.concatenate([rng.uniform(0, 50, size=(40, 2)),
                                 [[0, 0], [50, 0], [0, 50], [50, 50]]])
        tri = DelaunayTriangulator().triangulate(points)
        
        total = 0.0
        for face in range(len(tri)):
            (x1, y1), (x2, y2), (x3, y3) = tri.face_vertices(face)
            total += abs(x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2)) / 2
        
        assert total == pytest.approx(2500.0)
    
    def test_without_neighbors(self):
        """Test that adjacency is only computed on request."""
        points = np.array([[0, 0], [10, 0], [0, 10]], dtype=float)
        tri = DelaunayTriangulator().triangulate(points)
        
        assert tri.neighbors is None
        with pytest.raises(TriangulationError):
            tri.face_neighbors(0)
    
    def test_collinear_points(self):
        """Test that degenerate input fails."""
        points = np.array([[0, 0], [1, 1], [2, 2], [3, 3]], dtype=float)
        with pytest.raises(TriangulationError):
            DelaunayTriangulator().triangulate(points)
    
    def test_too_few_points(self):
        with pytest.raises(TriangulationError):
            DelaunayTriangulator().triangulate(np.array([[0, 0], [1, 0]], dtype=float))
    
    def test_non_finite_points(self):
        points = np.array([[0, 0], [1, 0], [0, np.nan]], dtype=float)
        with pytest.raises(TriangulationError):
            DelaunayTriangulator().triangulate(points)


class TestTriangulation:
    """Test cases for the triangulation record."""
    
    def test_invalid_face_index(self):
        """Test that faces must reference existing points."""
        with pytest.raises(TriangulationError):
            Triangulation(points=np.zeros((3, 2)), faces=[[0, 1, 3]])
    
    def test_neighbor_row_count(self):
        with pytest.raises(TriangulationError):
            Triangulation(points=np.zeros((3, 2)), faces=[[0, 1, 2]], neighbors=[[-1, -1, -1]] * 2)
    
    def test_face_neighbors_skip_hull(self):
        """Test that -1 entries are dropped."""
        tri = Triangulation(points=np.zeros((4, 2)), faces=[[0, 1, 2], [1, 2, 3]],
                            neighbors=[[1, -1, -1], [-1, 0, -1]])
        
        assert list(tri.face_neighbors(0)) == [1]
        assert list(tri.face_neighbors(1)) == [0]
    
    def test_create_triangulator(self):
        assert isinstance(create_triangulator('delaunay'), DelaunayTriangulator)
        with pytest.raises(InvalidInputError):
            create_triangulator('voronoi')
