import math
import numpy as np


def grid_shape(width: int, height: int, num_points: int) -> tuple:
    """Return (rows, cols) of the jitter grid for a target point count."""
    cols = max(1, math.ceil(math.sqrt(num_points * width / height)))
    rows = math.ceil(num_points / cols)
    return rows, cols


def sample_grid(width: int, height: int, num_points: int,
                rng: np.random.Generator) -> np.ndarray:
    """
    One jittered point per grid cell.
    
    Each point starts at its cell centre and is moved by up to half a cell
    in each axis, then clamped to the image. The point count is rows * cols,
    which can exceed num_points.
    
    Args:
        width: Image width
        height: Image height
        num_points: Target point count
        rng: Seeded random source
        
    Returns:
        Points (rows * cols, 2) as float64
    """
    rows, cols = grid_shape(width, height, num_points)
    col_size = width / cols
    row_size = height / rows
    
    # Draw order is x then y for every cell, row by row
    jitter = rng.random((rows, cols, 2)) - 0.5
    
    col_idx, row_idx = np.meshgrid(np.arange(cols), np.arange(rows))
    xs = col_idx * col_size + col_size / 2 + jitter[:, :, 0] * col_size
    ys = row_idx * row_size + row_size / 2 + jitter[:, :, 1] * row_size
    
    xs = np.clip(xs, 0, width)
    ys = np.clip(ys, 0, height)
    
    return np.stack([xs.ravel(), ys.ravel()], axis=1).astype(np.float64)
