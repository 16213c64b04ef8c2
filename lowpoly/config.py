from dataclasses import dataclass, field
from typing import List, Optional
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from hydra.core.config_store import ConfigStore
import os

from .errors import InvalidInputError
from .triangulation import TRIANGULATORS
from .types import GenerationParameters


@dataclass
class GenerationConfig:
    sampler: str = 'edge-aware'   # grid, poisson or edge-aware
    points: int = 2000
    max_size: int = 1024
    seed: int = 42
    edge_weight: float = 0.8      # Only used by edge-aware sampling
    color_space: str = 'lab'      # rgb or lab
    with_neighbors: bool = True


@dataclass
class TriangulationConfig:
    method: str = 'delaunay'


@dataclass
class OutputConfig:
    dir: str = 'outputs'
    indent: Optional[int] = 2


@dataclass
class LowPolyConfig:
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    triangulation: TriangulationConfig = field(default_factory=TriangulationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def register_configs():
    """Register configuration schemas with Hydra."""
    cs = ConfigStore.instance()
    cs.store(name="config", node=LowPolyConfig)


def load_config(config_path: Optional[str] = None, overrides: Optional[List[str]] = None) -> DictConfig:
    """Load configuration from file with optional overrides."""
    cfg = OmegaConf.structured(LowPolyConfig)
    try:
        if config_path and os.path.exists(config_path):
            cfg = OmegaConf.merge(cfg, OmegaConf.load(config_path))
        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_cli(overrides))
    except OmegaConfBaseException as exc:
        raise InvalidInputError(f"Invalid configuration: {exc}") from exc
    return cfg


def to_parameters(cfg: DictConfig) -> GenerationParameters:
    """Build generation parameters from the generation section of a config."""
    gen = cfg.generation
    return GenerationParameters(
        sampler=gen.sampler,
        points=gen.points,
        max_size=gen.max_size,
        seed=gen.seed,
        edge_weight=gen.edge_weight,
        color_space=gen.color_space,
        with_neighbors=gen.with_neighbors,
    )


def validate_config(cfg: DictConfig) -> GenerationParameters:
    """
    Validate configuration values.

    Returns:
        The generation parameters described by cfg

    Raises:
        InvalidInputError: On the first invalid value
    """
    params = to_parameters(cfg)

    if cfg.triangulation.method not in TRIANGULATORS:
        choices = ', '.join(sorted(TRIANGULATORS))
        raise InvalidInputError(
            f"Unknown triangulation method '{cfg.triangulation.method}' (expected one of: {choices})")
    if cfg.output.indent is not None and cfg.output.indent < 0:
        raise InvalidInputError(f"output.indent must be non-negative, got {cfg.output.indent}")

    return params


def setup_paths(cfg: DictConfig) -> None:
    """Create necessary directories based on configuration."""
    os.makedirs(cfg.output.dir, exist_ok=True)
