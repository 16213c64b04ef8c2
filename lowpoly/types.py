import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple
import numpy as np

from .errors import InvalidInputError


FORMAT_VERSION = "1.0"

Point = Tuple[float, float]


class Sampler(str, Enum):
    GRID = 'grid'
    POISSON = 'poisson'
    EDGE_AWARE = 'edge-aware'


class ColorSpace(str, Enum):
    RGB = 'rgb'
    LAB = 'lab'


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Row-major RGBA image.

    Args:
        pixels: uint8 array of shape (height, width, 4). The array is made
            read-only on construction.
    """
    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise InvalidInputError(
                f"Pixel buffer must have shape (height, width, 4), got {self.pixels.shape}")
        if self.pixels.shape[0] <= 0 or self.pixels.shape[1] <= 0:
            raise InvalidInputError(
                f"Image dimensions must be positive, got {self.width}x{self.height}")
        pixels = np.ascontiguousarray(self.pixels, dtype=np.uint8)
        pixels.flags.writeable = False
        object.__setattr__(self, 'pixels', pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]

    @classmethod
    def from_rgba_bytes(cls, data: bytes, width: int, height: int) -> 'PixelBuffer':
        """Build a buffer from a flat RGBA byte string of length width*height*4."""
        if width <= 0 or height <= 0:
            raise InvalidInputError(f"Image dimensions must be positive, got {width}x{height}")
        if len(data) != width * height * 4:
            raise InvalidInputError(
                f"Expected {width * height * 4} bytes for a {width}x{height} RGBA image, got {len(data)}")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        return cls(pixels.copy())


@dataclass(frozen=True)
class GenerationParameters:
    sampler: Sampler = Sampler.EDGE_AWARE
    points: int = 2000
    max_size: int = 1024
    seed: int = 42
    edge_weight: float = 0.8
    color_space: ColorSpace = ColorSpace.LAB
    with_neighbors: bool = True

    def __post_init__(self):
        try:
            object.__setattr__(self, 'sampler', Sampler(self.sampler))
        except ValueError:
            choices = ', '.join(s.value for s in Sampler)
            raise InvalidInputError(f"Unknown sampler '{self.sampler}' (expected one of: {choices})")
        try:
            object.__setattr__(self, 'color_space', ColorSpace(self.color_space))
        except ValueError:
            choices = ', '.join(c.value for c in ColorSpace)
            raise InvalidInputError(f"Unknown color space '{self.color_space}' (expected one of: {choices})")
        self.validate()

    def validate(self) -> None:
        """Check numeric ranges, raising InvalidInputError on the first violation."""
        for name in ('points', 'max_size', 'seed'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidInputError(f"{name} must be an integer, got {value!r}")
        if isinstance(self.edge_weight, bool) or not isinstance(self.edge_weight, numbers.Real):
            raise InvalidInputError(f"edge_weight must be a number, got {self.edge_weight!r}")
        if self.points <= 0:
            raise InvalidInputError(f"points must be positive, got {self.points}")
        if self.max_size <= 0:
            raise InvalidInputError(f"max_size must be positive, got {self.max_size}")
        if self.seed < 0:
            raise InvalidInputError(f"seed must be non-negative, got {self.seed}")
        if not 0.0 <= self.edge_weight <= 1.0:
            raise InvalidInputError(f"edge_weight must be between 0 and 1, got {self.edge_weight}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sampler': self.sampler.value,
            'points': int(self.points),
            'seed': int(self.seed),
            'color_space': self.color_space.value,
        }


@dataclass
class Triangle:
    id: int
    vertices: Tuple[Point, Point, Point]
    centroid: Point
    area_px: float
    avg_color: Tuple[int, int, int]
    neighbors: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'vertices': [[x, y] for x, y in self.vertices],
            'centroid': list(self.centroid),
            'area_px': self.area_px,
            'avg_color': list(self.avg_color),
            'neighbors': list(self.neighbors),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Triangle':
        vertices = tuple((float(x), float(y)) for x, y in data['vertices'])
        return cls(
            id=int(data['id']),
            vertices=vertices,
            centroid=(float(data['centroid'][0]), float(data['centroid'][1])),
            area_px=float(data['area_px']),
            avg_color=tuple(int(c) for c in data['avg_color']),
            neighbors=[int(n) for n in data.get('neighbors', [])],
        )


@dataclass
class LowPolyResult:
    """Output of one generation run: image metadata, parameters and triangles."""
    width: int
    height: int
    source: str
    params: GenerationParameters
    triangles: List[Triangle]
    version: str = FORMAT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'image': {'width': self.width, 'height': self.height, 'source': self.source},
            'params': self.params.to_dict(),
            'triangles': [t.to_dict() for t in self.triangles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LowPolyResult':
        """
        Rebuild a result from its serialized form.

        Only the parameters present in the output schema are restored; the
        remaining fields keep their defaults.
        """
        params = data['params']
        return cls(
            width=int(data['image']['width']),
            height=int(data['image']['height']),
            source=str(data['image']['source']),
            params=GenerationParameters(
                sampler=params['sampler'],
                points=int(params['points']),
                seed=int(params['seed']),
                color_space=params['color_space'],
            ),
            triangles=[Triangle.from_dict(t) for t in data['triangles']],
            version=str(data.get('version', FORMAT_VERSION)),
        )
