import math
from typing import List, Tuple
import numpy as np


MAX_ATTEMPTS = 30


def poisson_radius(width: int, height: int, num_points: int) -> float:
    """Minimum point separation targeted at roughly num_points points."""
    return math.sqrt((width * height) / (num_points * math.pi)) * 1.5


def sample_poisson(width: int, height: int, num_points: int,
                   rng: np.random.Generator, max_attempts: int = MAX_ATTEMPTS) -> np.ndarray:
    """
    Poisson-disc sampling with an active list.
    
    No two returned points are closer than poisson_radius(). The number of
    points depends on that radius and the image area, so it only roughly
    tracks num_points. Points are returned in the order they were accepted.
    
    Args:
        width: Image width
        height: Image height
        num_points: Target point count, used to derive the radius
        rng: Seeded random source
        max_attempts: Candidates tried around an active point before it retires
        
    Returns:
        Points (N, 2) as float64, all inside [0, width) x [0, height)
    """
    r = poisson_radius(width, height, num_points)
    cell = r / math.sqrt(2)
    cols = max(1, math.ceil(width / cell))
    rows = max(1, math.ceil(height / cell))
    
    # Each cell holds at most one point since its diagonal equals r
    grid = np.full((rows, cols), -1, dtype=np.int64)
    points: List[Tuple[float, float]] = []
    active: List[int] = []
    
    def insert(px: float, py: float) -> None:
        grid[int(py // cell), int(px // cell)] = len(points)
        active.append(len(points))
        points.append((px, py))
    
    def is_free(px: float, py: float) -> bool:
        col = int(px // cell)
        row = int(py // cell)
        for nr in range(max(0, row - 2), min(rows, row + 3)):
            for nc in range(max(0, col - 2), min(cols, col + 3)):
                idx = grid[nr, nc]
                if idx >= 0:
                    qx, qy = points[idx]
                    if math.hypot(qx - px, qy - py) < r:
                        return False
        return True
    
    insert(rng.random() * width, rng.random() * height)
    
    while active:
        active_idx = int(rng.random() * len(active))
        ox, oy = points[active[active_idx]]
        found = False
        
        for _ in range(max_attempts):
            angle = 2 * math.pi * rng.random()
            dist = r * (1 + rng.random())
            px = ox + dist * math.cos(angle)
            py = oy + dist * math.sin(angle)
            
            if px < 0 or px >= width or py < 0 or py >= height:
                continue
            
            if is_free(px, py):
                insert(px, py)
                found = True
                break
        
        if not found:
            active.pop(active_idx)
    
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)
