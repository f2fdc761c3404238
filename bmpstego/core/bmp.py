"""
BMP geometry.

Only what the codec needs is read from the header: the pixel width and
height (little-endian unsigned 32-bit integers at offsets 18 and 22). The
header itself is treated as opaque and copied verbatim; pixel data is taken
to start right after it and to span width * height * 3 bytes with no row
padding.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Optional

from PIL import Image, UnidentifiedImageError

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import FileOpenError, TruncatedReadError, failure_stage
from .capacity import plan_capacity

logger = logging.getLogger(__name__)

WIDTH_OFFSET = 18
HEIGHT_OFFSET = 22
BYTES_PER_PIXEL = 3

_DIMENSIONS = struct.Struct("<II")


@dataclass
class BmpGeometry:
    """
    Header and dimensions of a 24-bit BMP.

    Attributes:
        header: Raw header bytes, copied verbatim into stego images
        width: Pixel width
        height: Pixel height
    """

    header: bytes
    width: int
    height: int

    @property
    def pixel_capacity(self) -> int:
        """Number of carrier bytes (one per colour channel)."""
        return self.width * self.height * BYTES_PER_PIXEL


def read_geometry(stream: BinaryIO, config: Optional[StegoConfig] = None) -> BmpGeometry:
    """
    Read the header from the start of ``stream``.

    The stream is left positioned at the first pixel byte.

    Raises:
        TruncatedReadError: If the stream is shorter than the header
    """
    config = config or DEFAULT_CONFIG
    stream.seek(0)
    header = stream.read(config.header_size)
    if len(header) != config.header_size:
        raise TruncatedReadError(
            f"Image header truncated: {len(header)} of {config.header_size} bytes",
            expected=config.header_size,
            actual=len(header),
        )
    width, height = _DIMENSIONS.unpack_from(header, WIDTH_OFFSET)
    logger.debug(f"BMP geometry {width}x{height}")
    return BmpGeometry(header=header, width=width, height=height)


def describe_image(path: str, config: Optional[StegoConfig] = None) -> Dict[str, Any]:
    """
    Summarise an image for display.

    Combines what Pillow reports about the file (format, mode, size) with the
    raw header geometry and the resulting hiding capacity.

    Returns:
        Dictionary with format, mode, width, height, pixel_capacity,
        usable_bytes and max_secret_size.

    Raises:
        FileOpenError: If the file cannot be opened
    """
    config = config or DEFAULT_CONFIG
    info: Dict[str, Any] = {"path": path, "format": None, "mode": None}

    try:
        with Image.open(path) as img:
            info["format"] = img.format
            info["mode"] = img.mode
    except UnidentifiedImageError:
        logger.warning(f"{path} is not an image Pillow recognises")
    except OSError as e:
        raise FileOpenError(path, str(e))

    try:
        stream = open(path, "rb")
    except OSError as e:
        raise FileOpenError(path, str(e))
    with stream, failure_stage("read_geometry"):
        geometry = read_geometry(stream, config)

    report = plan_capacity(geometry.pixel_capacity, 0, config.fixed_overhead_bytes)
    info.update(
        width=geometry.width,
        height=geometry.height,
        pixel_capacity=geometry.pixel_capacity,
        usable_bytes=report.usable_bytes,
        max_secret_size=report.max_secret_size,
    )
    return info
