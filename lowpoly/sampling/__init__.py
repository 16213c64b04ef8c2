from typing import Optional
import numpy as np

from ..errors import InvalidInputError
from ..types import GenerationParameters, Sampler
from .grid import sample_grid
from .poisson import sample_poisson
from .edge_aware import sample_edge_aware
from .border import add_border_points


def sample_points(params: GenerationParameters, width: int, height: int,
                  rng: np.random.Generator, edge_map: Optional[np.ndarray] = None) -> np.ndarray:
    """Run the sampler selected in params. edge_map is required for edge-aware sampling."""
    if params.sampler == Sampler.GRID:
        return sample_grid(width, height, params.points, rng)
    elif params.sampler == Sampler.POISSON:
        return sample_poisson(width, height, params.points, rng)
    elif params.sampler == Sampler.EDGE_AWARE:
        if edge_map is None:
            raise InvalidInputError("Edge-aware sampling requires an edge map")
        return sample_edge_aware(width, height, params.points, edge_map, params.edge_weight, rng)
    raise InvalidInputError(f"Unsupported sampler: {params.sampler}")


__all__ = [
    'sample_points',
    'sample_grid',
    'sample_poisson',
    'sample_edge_aware',
    'add_border_points'
]
