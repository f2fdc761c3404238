# bmpstego Test Configuration
# This file contains shared fixtures for unit and integration tests

import pytest
import sys
import os

import numpy as np
from PIL import Image

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return os.path.dirname(os.path.dirname(__file__))


@pytest.fixture
def temp_directory(tmp_path):
    """Provide a temporary directory for test operations."""
    return tmp_path


@pytest.fixture
def sample_data(temp_directory):
    """Provide a small text secret."""
    data_file = temp_directory / "sample.txt"
    data_file.write_text("Hello, World! This is test data for bmpstego.")
    return data_file


@pytest.fixture
def sample_binary_data(temp_directory):
    """Provide a binary secret covering every byte value."""
    binary_file = temp_directory / "sample.bin"
    binary_file.write_bytes(bytes(range(256)))
    return binary_file


@pytest.fixture
def make_cover(temp_directory):
    """
    Factory writing a noisy 24-bit BMP cover.

    Widths should be multiples of 4 so rows carry no padding.
    """
    def _make_cover(width=32, height=32, name="cover.bmp", seed=1234):
        rng = np.random.default_rng(seed)
        pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
        path = temp_directory / name
        Image.fromarray(pixels, 'RGB').save(str(path), format='BMP')
        return path

    return _make_cover


@pytest.fixture
def cover_image(make_cover):
    """A 32x32 cover: 3072 pixel bytes, room for 370 secret bytes."""
    return make_cover()
