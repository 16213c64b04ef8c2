import math
from pathlib import Path
from typing import List, Tuple, Union
import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, InvalidInputError
from .types import PixelBuffer


def get_image_files(directory: str, extensions: Tuple[str, ...] = ('.jpg', '.jpeg', '.png', '.tiff', '.bmp', '.webp')) -> List[Path]:
    """Get all image files from a directory recursively."""
    image_files = set()
    path = Path(directory)
    
    for ext in extensions:
        image_files.update(path.rglob(f'*{ext}'))
        image_files.update(path.rglob(f'*{ext.upper()}'))
    
    return sorted(image_files)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scaled_size(width: int, height: int, max_size: int) -> Tuple[int, int]:
    """
    Compute the size an image is normalized to.

    The larger dimension becomes max_size when either dimension exceeds it;
    the other one keeps the aspect ratio, rounded to the nearest integer.
    Images that already fit are left alone.
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Image dimensions must be positive, got {width}x{height}")
    if max_size <= 0:
        raise InvalidInputError(f"max_size must be positive, got {max_size}")
    
    if width <= max_size and height <= max_size:
        return width, height
    
    if width > height:
        new_h = max(1, _round_half_up(height * max_size / width))
        return max_size, new_h
    else:
        new_w = max(1, _round_half_up(width * max_size / height))
        return new_w, max_size


def image_to_buffer(image: Image.Image) -> PixelBuffer:
    """Convert a PIL image of any mode into an RGBA pixel buffer."""
    return PixelBuffer(np.array(image.convert('RGBA'), dtype=np.uint8))


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    return Image.fromarray(np.array(buffer.pixels))


def normalize_image(buffer: PixelBuffer, max_size: int) -> PixelBuffer:
    """
    Downscale a pixel buffer so neither dimension exceeds max_size.
    
    Args:
        buffer: Source pixel buffer
        max_size: Bound for the larger dimension
        
    Returns:
        The same buffer when it already fits, otherwise a new buffer of the
        scaled size resampled with a Lanczos filter
    """
    new_w, new_h = scaled_size(buffer.width, buffer.height, max_size)
    if (new_w, new_h) == (buffer.width, buffer.height):
        return buffer
    
    image = buffer_to_image(buffer)
    image = image.resize((new_w, new_h), Image.Resampling.LANCZOS)
    
    return image_to_buffer(image)


def load_image(image_path: Union[str, Path]) -> PixelBuffer:
    """Decode an image file into an RGBA pixel buffer."""
    try:
        with Image.open(image_path) as image:
            image.load()
            return image_to_buffer(image)
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeError(f"Failed to load image: {image_path} ({exc})") from exc
