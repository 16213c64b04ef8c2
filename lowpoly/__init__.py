"""
lowpoly - Low-poly vector art from raster images.

This package samples points over an image, triangulates them and colors
each triangle with the average color of the pixels it covers, producing
a structured description of the resulting faceted image.
"""

__version__ = "1.0.0"

from .errors import LowPolyError, InvalidInputError, DecodeError, TriangulationError
from .types import (
    Sampler, ColorSpace, PixelBuffer, GenerationParameters, Triangle, LowPolyResult
)
from .triangulation import Triangulation, Triangulator, DelaunayTriangulator, create_triangulator
from .pipeline import generate, generate_from_file, save_result, load_result
from .config import LowPolyConfig, load_config, validate_config

__all__ = [
    'LowPolyError',
    'InvalidInputError',
    'DecodeError',
    'TriangulationError',
    'Sampler',
    'ColorSpace',
    'PixelBuffer',
    'GenerationParameters',
    'Triangle',
    'LowPolyResult',
    'Triangulation',
    'Triangulator',
    'DelaunayTriangulator',
    'create_triangulator',
    'generate',
    'generate_from_file',
    'save_result',
    'load_result',
    'LowPolyConfig',
    'load_config',
    'validate_config'
]
