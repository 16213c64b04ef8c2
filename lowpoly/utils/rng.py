import numpy as np

from ..errors import InvalidInputError


def make_rng(seed: int) -> np.random.Generator:
    """
    Create the deterministic random source used by the samplers.

    The same seed always yields the same sequence, so every sampler draws
    from an explicitly passed generator and never from global state.
    """
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)) or seed < 0:
        raise InvalidInputError(f"seed must be a non-negative integer, got {seed!r}")
    return np.random.default_rng(int(seed))
