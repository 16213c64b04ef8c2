from typing import Tuple
import numpy as np


def triangle_area(vertices: np.ndarray) -> float:
    """Unsigned area of a (3, 2) triangle by the shoelace formula."""
    (x1, y1), (x2, y2), (x3, y3) = vertices
    return abs(x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2)) / 2.0


def triangle_centroid(vertices: np.ndarray) -> Tuple[float, float]:
    cx, cy = vertices.mean(axis=0)
    return float(cx), float(cy)


def within_bounds(vertices: np.ndarray, width: int, height: int) -> bool:
    """True when every vertex lies in [0, width] x [0, height]."""
    xs, ys = vertices[:, 0], vertices[:, 1]
    return bool(np.all((xs >= 0) & (xs <= width) & (ys >= 0) & (ys <= height)))


def barycentric_mask(vertices: np.ndarray, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """
    Test which sample positions fall inside (or on the edge of) a triangle.
    
    Args:
        vertices: Triangle vertices (3, 2)
        xs: Sample x coordinates, any shape
        ys: Sample y coordinates, same shape as xs
        
    Returns:
        Boolean array shaped like xs, True where all three barycentric
        weights are non-negative
    """
    (x1, y1), (x2, y2), (x3, y3) = vertices
    det = (y2 - y3) * (x1 - x3) + (x3 - x2) * (y1 - y3)
    if det == 0:
        return np.zeros(np.shape(xs), dtype=bool)
    
    lambda1 = ((y2 - y3) * (xs - x3) + (x3 - x2) * (ys - y3)) / det
    lambda2 = ((y3 - y1) * (xs - x3) + (x1 - x3) * (ys - y3)) / det
    lambda3 = 1.0 - lambda1 - lambda2
    
    return (lambda1 >= 0) & (lambda2 >= 0) & (lambda3 >= 0)
