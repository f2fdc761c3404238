"""
Encode pipeline.

Hides a secret file in a cover BMP:

    1. Open the cover image and the secret file
    2. Reject an empty secret and derive its extension
    3. Read the cover geometry and check capacity (nothing written yet)
    4. Copy the header verbatim to the stego image
    5. Write the container (signature, extension, sizes, payload)
    6. Copy the untouched remainder of the pixel data

The stego image only appears at its final path once every step succeeded.
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import EmptySecretFileError, EncodeError, failure_stage
from ..stego.container import ContainerHeader, ContainerWriter
from .bmp import read_geometry
from .capacity import ensure_capacity
from .files import PathLike, atomic_output, file_size, open_binary
from .naming import secret_extension

logger = logging.getLogger(__name__)


@dataclass
class EncodeSummary:
    """
    Outcome of a successful encode.

    Attributes:
        cover_path: Cover image read
        secret_path: Secret file hidden
        stego_path: Stego image written
        extension: Extension stored in the container
        payload_size: Secret bytes hidden
        carrier_bytes_used: Pixel bytes carrying the container
        pixel_capacity: Pixel bytes in the cover
    """

    cover_path: str
    secret_path: str
    stego_path: str
    extension: str
    payload_size: int
    carrier_bytes_used: int
    pixel_capacity: int


def encode_file(
    cover_path: PathLike,
    secret_path: PathLike,
    stego_path: Optional[PathLike] = None,
    config: Optional[StegoConfig] = None,
) -> EncodeSummary:
    """
    Hide ``secret_path`` inside ``cover_path``, writing ``stego_path``.

    Args:
        cover_path: Uncompressed 24-bit BMP
        secret_path: File to hide; its name must carry a short extension
        stego_path: Output image, defaults to ``config.default_stego_name``
        config: Format configuration

    Returns:
        EncodeSummary describing what was written.

    Raises:
        StegoError: Subclass identifying the failure; ``details["stage"]``
            names the step that failed.
    """
    config = config or DEFAULT_CONFIG
    stego_path = stego_path or config.default_stego_name

    logger.info("Opening required files")
    with ExitStack() as stack:
        with failure_stage("open_files"):
            cover = open_binary(cover_path, stack)
            secret = open_binary(secret_path, stack)

        logger.info("## Encoding procedure started ##")
        with failure_stage("secret_size"):
            secret_size = file_size(secret)
            if secret_size <= 0:
                raise EmptySecretFileError(f"Secret file is empty: {secret_path}")
            extension = secret_extension(str(secret_path), config)

        logger.info("Checking capacity")
        with failure_stage("check_capacity"):
            geometry = read_geometry(cover, config)
            report = ensure_capacity(
                geometry.pixel_capacity, secret_size, config.fixed_overhead_bytes
            )
        logger.info(
            f"Capacity OK: {report.required_bytes} of {report.usable_bytes} bytes "
            f"({report.usage_percent:.1f}%)"
        )

        header = ContainerHeader(extension=extension, payload_length=secret_size)
        with failure_stage("open_output"), atomic_output(stego_path) as sink:
            logger.info("Copying image header")
            with failure_stage("copy_header"):
                written = sink.write(geometry.header)
                if written != len(geometry.header):
                    raise EncodeError("Short write while copying image header")

            writer = ContainerWriter(cover, sink, config)
            writer.write_header(header)

            logger.info(f"Encoding {secret_path} data")
            writer.write_payload(secret, secret_size)

            logger.info("Copying leftover image data")
            writer.copy_remaining()

    logger.info("## Encoding done successfully ##")
    return EncodeSummary(
        cover_path=str(cover_path),
        secret_path=str(secret_path),
        stego_path=str(stego_path),
        extension=extension,
        payload_size=secret_size,
        carrier_bytes_used=writer.carrier_bytes_consumed,
        pixel_capacity=geometry.pixel_capacity,
    )
