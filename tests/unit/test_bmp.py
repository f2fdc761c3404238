"""
Unit Tests for BMP Geometry, Image Inspection and Configuration
"""

import io
import struct
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bmpstego.config import DEFAULT_CONFIG, StegoConfig
from bmpstego.core.bmp import describe_image, read_geometry
from bmpstego.errors import FileOpenError, InvalidInputError, TruncatedReadError


def bmp_header(width, height):
    """A minimal 54-byte BITMAPINFOHEADER for a 24-bit image."""
    pixel_bytes = width * height * 3
    return (
        b"BM"
        + struct.pack("<IHHI", 54 + pixel_bytes, 0, 0, 54)
        + struct.pack("<IiiHHIIiiII", 40, width, height, 1, 24, 0, pixel_bytes, 2835, 2835, 0, 0)
    )


class TestReadGeometry:
    """Test cases for header parsing."""

    def test_dimensions_and_capacity(self):
        """Width and height come from offsets 18 and 22."""
        header = bmp_header(16, 10)
        stream = io.BytesIO(header + bytes(16 * 10 * 3))

        geometry = read_geometry(stream)

        assert geometry.width == 16
        assert geometry.height == 10
        assert geometry.pixel_capacity == 480
        assert geometry.header == header

    def test_stream_left_at_pixel_data(self):
        """Reading the geometry positions the stream after the header."""
        stream = io.BytesIO(bmp_header(4, 4) + bytes(48))
        stream.seek(20)
        read_geometry(stream)
        assert stream.tell() == 54

    def test_truncated_header(self):
        """Files shorter than the header are rejected."""
        with pytest.raises(TruncatedReadError):
            read_geometry(io.BytesIO(bmp_header(4, 4)[:53]))

    def test_pillow_written_cover(self, cover_image):
        """Pillow's 24-bit BMPs have the expected 54-byte layout."""
        with open(cover_image, "rb") as f:
            geometry = read_geometry(f)
        assert (geometry.width, geometry.height) == (32, 32)
        assert geometry.pixel_capacity == 3072


class TestDescribeImage:
    """Test cases for image inspection."""

    def test_describe_cover(self, cover_image):
        """Pillow format data is merged with capacity figures."""
        info = describe_image(str(cover_image))

        assert info["format"] == "BMP"
        assert info["mode"] == "RGB"
        assert info["width"] == 32
        assert info["usable_bytes"] == 384
        assert info["max_secret_size"] == 370

    def test_unrecognised_image(self, temp_directory):
        """Header geometry is still reported when Pillow cannot parse the file."""
        path = temp_directory / "raw.bmp"
        path.write_bytes(b"XX" + bmp_header(8, 8)[2:] + bytes(192))

        info = describe_image(str(path))

        assert info["format"] is None
        assert info["pixel_capacity"] == 192

    def test_missing_file(self, temp_directory):
        """Missing files raise FileOpenError."""
        with pytest.raises(FileOpenError):
            describe_image(str(temp_directory / "missing.bmp"))


class TestStegoConfig:
    """Test cases for configuration validation."""

    def test_defaults(self):
        """Defaults match the documented format constants."""
        assert DEFAULT_CONFIG.signature == b"#*"
        assert DEFAULT_CONFIG.signature_length == 2
        assert DEFAULT_CONFIG.header_size == 54
        assert DEFAULT_CONFIG.fixed_overhead_bytes == 14
        assert DEFAULT_CONFIG.default_stego_name == "stego.bmp"
        assert DEFAULT_CONFIG.default_output_stem == "decoded"

    @pytest.mark.parametrize("kwargs", [
        {"signature": b""},
        {"signature": b"\xff\xfe"},
        {"chunk_size": 0},
        {"header_size": 20},
        {"max_extension_length": 0},
        {"max_extension_length": 11},
    ])
    def test_invalid_values(self, kwargs):
        """Invalid configuration is rejected on construction."""
        with pytest.raises(InvalidInputError):
            StegoConfig(**kwargs)
