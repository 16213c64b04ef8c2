import warnings
import numpy as np

from ..errors import InvalidInputError


ATTEMPTS_PER_POINT = 10


def acceptance_probability(edge_value: float, edge_weight: float) -> float:
    """Chance of keeping a pixel whose edge map value is edge_value (0-255)."""
    return (1.0 - edge_weight) + edge_weight * (edge_value / 255.0)


def sample_edge_aware(width: int, height: int, num_points: int,
                      edge_map: np.ndarray, edge_weight: float,
                      rng: np.random.Generator) -> np.ndarray:
    """
    Rejection sampling biased towards strong edges.
    
    Uniform pixel positions are drawn and kept with acceptance_probability().
    Sampling stops after num_points acceptances or 10 * num_points draws, so
    flat images with a high edge_weight can return fewer points than asked.
    
    Args:
        width: Image width
        height: Image height
        num_points: Target point count
        edge_map: Edge strength (height, width) in [0, 255]
        edge_weight: Bias towards edges in [0, 1]; 0 samples uniformly
        rng: Seeded random source
        
    Returns:
        Integer pixel positions (N, 2) as float64, N <= num_points
    """
    if edge_map.shape != (height, width):
        raise InvalidInputError(f"Edge map shape {edge_map.shape} does not match image {width}x{height}")
    
    points = []
    attempts = 0
    max_attempts = num_points * ATTEMPTS_PER_POINT
    
    while len(points) < num_points and attempts < max_attempts:
        x = int(rng.random() * width)
        y = int(rng.random() * height)
        probability = acceptance_probability(edge_map[y, x], edge_weight)
        if rng.random() < probability:
            points.append((x, y))
        attempts += 1
    
    if len(points) < num_points:
        warnings.warn(f"Edge-aware sampling accepted {len(points)} of {num_points} points "
                      f"after {attempts} draws")
    
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)
