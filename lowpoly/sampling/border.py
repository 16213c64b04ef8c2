import math
import numpy as np


def border_divisions(num_points: int) -> int:
    """Number of segments each image edge is split into."""
    return math.ceil(math.sqrt(num_points) / 2)


def add_border_points(points: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Append the image corners and evenly spaced edge points.
    
    Each edge receives border_divisions(len(points)) - 1 interior points so
    the triangulation reaches the whole rectangle. Nothing is deduplicated
    against the existing points.
    
    Returns:
        A new (N + 4 + 4 * (k - 1), 2) array; the input is left untouched
    """
    extra = [(0.0, 0.0), (float(width), 0.0), (0.0, float(height)), (float(width), float(height))]
    
    divisions = border_divisions(len(points))
    for i in range(1, divisions):
        fx = i / divisions * width
        fy = i / divisions * height
        extra.extend([(fx, 0.0), (fx, float(height)), (0.0, fy), (float(width), fy)])
    
    return np.concatenate([np.asarray(points, dtype=np.float64).reshape(-1, 2),
                           np.asarray(extra, dtype=np.float64)])
