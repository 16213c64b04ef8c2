import pytest
import numpy as np

from lowpoly.edges import create_edge_map, luminance, sobel_magnitude
from lowpoly.types import PixelBuffer


def make_buffer(rgb: np.ndarray) -> PixelBuffer:
    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    return PixelBuffer(np.concatenate([rgb.astype(np.uint8), alpha], axis=2))


class TestEdgeDetection:
    """Test cases for the Sobel edge map."""
    
    def test_luminance_weights(self):
        """Test grayscale conversion of pure primaries."""
        rgb = np.zeros((1, 3, 3), dtype=np.uint8)
        rgb[0, 0] = [255, 0, 0]
        rgb[0, 1] = [0, 255, 0]
        rgb[0, 2] = [0, 0, 255]
        
        gray = luminance(make_buffer(rgb))
        
        assert np.allclose(gray[0], [0.299 * 255, 0.587 * 255, 0.114 * 255])
    
    def test_all_black_is_zero(self):
        """Test that a flat image yields an all-zero map without dividing."""
        edge_map = create_edge_map(make_buffer(np.zeros((12, 16, 3))))
        
        assert edge_map.shape == (12, 16)
        assert np.all(edge_map == 0)
        assert np.all(np.isfinite(edge_map))
    
    def test_vertical_step_edge(self):
        """Test a black/white boundary produces a normalized edge."""
        rgb = np.zeros((10, 10, 3))
        rgb[:, 5:] = 255
        
        edge_map = create_edge_map(make_buffer(rgb))
        
        assert edge_map.max() == pytest.approx(255.0)
        # The two columns next to the step carry the gradient
        assert np.allclose(edge_map[1:-1, 4], 255.0)
        assert np.allclose(edge_map[1:-1, 5], 255.0)
        assert np.all(edge_map[:, :4] == 0)
        assert np.all(edge_map[:, 6:] == 0)
    
    def test_border_ring_is_zero(self):
        """Test that border pixels are never filtered."""
        rng = np.random.default_rng(0)
        rgb = rng.integers(0, 256, size=(20, 30, 3))
        
        edge_map = create_edge_map(make_buffer(rgb))
        
        assert np.all(edge_map[0, :] == 0)
        assert np.all(edge_map[-1, :] == 0)
        assert np.all(edge_map[:, 0] == 0)
        assert np.all(edge_map[:, -1] == 0)
        assert edge_map.min() >= 0
        assert edge_map.max() == pytest.approx(255.0)
    
    def test_tiny_image(self):
        """Test images without interior pixels."""
        edge_map = create_edge_map(make_buffer(np.full((2, 2, 3), 200)))
        
        assert edge_map.shape == (2, 2)
        assert np.all(edge_map == 0)
    
    def test_sobel_diagonal_gradient(self):
        """Test magnitude combines both kernels."""
        gray = np.add.outer(np.arange(5.0), np.arange(5.0))
        magnitude = sobel_magnitude(gray)
        
        # Unit slope in x and y gives gx = gy = 8
        assert magnitude[2, 2] == pytest.approx(np.hypot(8, 8))
    
    def test_edge_map_read_only(self):
        """Test that the edge map cannot be modified."""
        edge_map = create_edge_map(make_buffer(np.zeros((5, 5, 3))))
        with pytest.raises(ValueError):
            edge_map[0, 0] = 1.0
