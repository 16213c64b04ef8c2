import pytest
import numpy as np
from PIL import Image
import tempfile
import os
from pathlib import Path

from lowpoly.errors import DecodeError, InvalidInputError
from lowpoly.preprocess import (
    get_image_files, scaled_size, normalize_image, load_image, image_to_buffer
)
from lowpoly.types import PixelBuffer


class TestPreprocessing:
    """Test cases for image loading and normalization."""
    
    def create_test_image(self, size=(100, 150), color=(255, 0, 0)):
        """Create a test image."""
        return Image.new('RGB', size, color)
    
    def test_get_image_files(self):
        """Test finding image files in directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            # Create test images
            for i in range(3):
                img = self.create_test_image()
                img.save(os.path.join(tmpdir, f'test_{i}.png'))
            
            # Create non-image file
            with open(os.path.join(tmpdir, 'test.txt'), 'w') as f:
                f.write('not an image')
            
            # Find images
            images = get_image_files(tmpdir)
            assert len(images) == 3
            assert all(f.suffix == '.png' for f in images)
    
    def test_scaled_size_landscape(self):
        """Test that the width is bounded for landscape images."""
        assert scaled_size(2000, 1000, 1024) == (1024, 512)
    
    def test_scaled_size_portrait(self):
        """Test that the height is bounded for portrait images."""
        assert scaled_size(1000, 3000, 1024) == (341, 1024)
    
    def test_scaled_size_square(self):
        """Test square images shrink on both axes."""
        assert scaled_size(2000, 2000, 1024) == (1024, 1024)
    
    def test_scaled_size_fits(self):
        """Test that images within the bound are unchanged."""
        assert scaled_size(500, 400, 1024) == (500, 400)
        assert scaled_size(1024, 1024, 1024) == (1024, 1024)
    
    def test_scaled_size_rounds_half_up(self):
        """Test rounding of the scaled dimension."""
        # 5 * 4 / 8 = 2.5
        assert scaled_size(8, 5, 4) == (4, 3)
    
    def test_scaled_size_invalid(self):
        """Test non-positive dimensions are rejected."""
        with pytest.raises(InvalidInputError):
            scaled_size(0, 10, 100)
        with pytest.raises(InvalidInputError):
            scaled_size(10, 10, 0)
    
    def test_normalize_image_noop(self):
        """Test that a fitting buffer is returned as is."""
        buffer = image_to_buffer(self.create_test_image(size=(40, 30)))
        assert normalize_image(buffer, 64) is buffer
    
    def test_normalize_image_resizes(self):
        """Test downscaling keeps aspect ratio and color."""
        buffer = image_to_buffer(self.create_test_image(size=(200, 100), color=(0, 255, 0)))
        
        normalized = normalize_image(buffer, 50)
        
        assert (normalized.width, normalized.height) == (50, 25)
        assert normalized.pixels.shape == (25, 50, 4)
        assert np.abs(normalized.rgb.astype(int) - [0, 255, 0]).max() <= 1
        assert normalized.pixels[:, :, 3].min() >= 254
    
    def test_load_image(self):
        """Test decoding an RGB file into an RGBA buffer."""
        with tempfile.NamedTemporaryFile(suffix='.png', delete=False) as f:
            temp_path = Path(f.name)
        
        try:
            self.create_test_image(size=(150, 100), color=(10, 20, 30)).save(temp_path)
            buffer = load_image(temp_path)
            
            assert isinstance(buffer, PixelBuffer)
            assert (buffer.width, buffer.height) == (150, 100)
            assert np.all(buffer.rgb == [10, 20, 30])
            assert np.all(buffer.pixels[:, :, 3] == 255)
        finally:
            os.unlink(temp_path)
    
    def test_load_image_not_an_image(self):
        """Test that undecodable files raise DecodeError."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.png', delete=False) as f:
            f.write('not an image')
            temp_path = f.name
        
        try:
            with pytest.raises(DecodeError):
                load_image(temp_path)
        finally:
            os.unlink(temp_path)
    
    def test_load_image_missing(self):
        """Test that missing files raise DecodeError."""
        with pytest.raises(DecodeError):
            load_image('/nonexistent/image.png')


class TestPixelBuffer:
    """Test cases for the pixel buffer type."""
    
    def test_read_only(self):
        """Test that the pixel array cannot be modified."""
        buffer = PixelBuffer(np.zeros((4, 4, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            buffer.pixels[0, 0, 0] = 1
    
    def test_from_rgba_bytes(self):
        """Test building a buffer from raw bytes."""
        data = bytes([255, 0, 0, 255]) * 6
        buffer = PixelBuffer.from_rgba_bytes(data, 3, 2)
        
        assert (buffer.width, buffer.height) == (3, 2)
        assert np.all(buffer.rgb == [255, 0, 0])
    
    def test_from_rgba_bytes_wrong_length(self):
        """Test that a length mismatch is rejected."""
        with pytest.raises(InvalidInputError):
            PixelBuffer.from_rgba_bytes(bytes(10), 3, 2)
    
    def test_invalid_shape(self):
        """Test that non-RGBA arrays and empty images are rejected."""
        with pytest.raises(InvalidInputError):
            PixelBuffer(np.zeros((4, 4, 3), dtype=np.uint8))
        with pytest.raises(InvalidInputError):
            PixelBuffer(np.zeros((0, 4, 4), dtype=np.uint8))
