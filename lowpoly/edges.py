import numpy as np

from .types import PixelBuffer


# Rec. 601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

SOBEL_X = np.array([[-1, 0, 1],
                    [-2, 0, 2],
                    [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = SOBEL_X.T


def luminance(buffer: PixelBuffer) -> np.ndarray:
    """Grayscale intensity (H, W) as float64 in [0, 255]."""
    return buffer.rgb.astype(np.float64) @ LUMA_WEIGHTS


def sobel_magnitude(gray: np.ndarray) -> np.ndarray:
    """
    Gradient magnitude of a 2D field using the 3x3 Sobel operator.

    Only interior pixels are filtered; the one-pixel border ring stays zero.
    """
    height, width = gray.shape
    magnitude = np.zeros((height, width), dtype=np.float64)
    if height < 3 or width < 3:
        return magnitude
    
    gx = np.zeros((height - 2, width - 2), dtype=np.float64)
    gy = np.zeros((height - 2, width - 2), dtype=np.float64)
    
    for ky in range(3):
        for kx in range(3):
            window = gray[ky:ky + height - 2, kx:kx + width - 2]
            if SOBEL_X[ky, kx]:
                gx += SOBEL_X[ky, kx] * window
            if SOBEL_Y[ky, kx]:
                gy += SOBEL_Y[ky, kx] * window
    
    magnitude[1:-1, 1:-1] = np.hypot(gx, gy)
    return magnitude


def create_edge_map(buffer: PixelBuffer) -> np.ndarray:
    """
    Compute the normalized edge-strength map of an image.
    
    Args:
        buffer: Normalized pixel buffer
        
    Returns:
        Read-only float array (H, W) in [0, 255] whose maximum is 255, or all
        zeros for an image without gradients
    """
    edge_map = sobel_magnitude(luminance(buffer))
    
    max_gradient = edge_map.max()
    if max_gradient > 0:
        edge_map *= 255.0 / max_gradient
    
    edge_map.flags.writeable = False
    return edge_map
