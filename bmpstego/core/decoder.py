"""
Decode pipeline.

Recovers a hidden file from a stego BMP: skip the header, verify the
signature, read the extension and payload size, then stream the payload to
an output file named from the user's base name and the decoded extension.
"""

import logging
import os
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import TruncatedStegoImageError, failure_stage
from ..stego.bits import BITS_PER_BYTE
from ..stego.container import ContainerReader
from .files import PathLike, atomic_output, file_size, open_binary
from .naming import resolve_output_name

logger = logging.getLogger(__name__)


@dataclass
class DecodeSummary:
    """
    Outcome of a successful decode.

    Attributes:
        stego_path: Stego image read
        output_path: File written with the recovered payload
        extension: Extension found in the container
        payload_size: Bytes recovered
        carrier_bytes_used: Pixel bytes the container occupied
    """

    stego_path: str
    output_path: str
    extension: str
    payload_size: int
    carrier_bytes_used: int


def decode_file(
    stego_path: PathLike,
    output_base: Optional[str] = None,
    config: Optional[StegoConfig] = None,
) -> DecodeSummary:
    """
    Extract the file hidden in ``stego_path``.

    Args:
        stego_path: Stego BMP produced by encode_file
        output_base: Base name for the recovered file; anything from its
            first dot is replaced by the decoded extension. Defaults to
            ``config.default_output_stem``.
        config: Format configuration, must match the one used to encode

    Returns:
        DecodeSummary describing what was written.

    Raises:
        NotSteganographicImageError: If the image carries no container
        CorruptContainerError: If a length field is implausible
        ExtensionTooLongError: If the stored extension is too long
        TruncatedStegoImageError: If the image ends before the payload does
    """
    config = config or DEFAULT_CONFIG

    logger.info("Opening required files")
    with ExitStack() as stack:
        with failure_stage("open_files"):
            stego = open_binary(stego_path, stack)

        with failure_stage("skip_header"):
            total = file_size(stego)
            if total < config.header_size:
                raise TruncatedStegoImageError(
                    f"Image shorter than its {config.header_size}-byte header",
                    expected=config.header_size,
                    actual=total,
                )
            stego.seek(config.header_size, os.SEEK_SET)

        reader = ContainerReader(stego, config)
        header = reader.read_header()

        with failure_stage("payload_size"):
            available = total - stego.tell()
            needed = header.payload_length * BITS_PER_BYTE
            if needed > available:
                raise TruncatedStegoImageError(
                    f"Payload of {header.payload_length} bytes needs {needed} carrier "
                    f"bytes, only {available} remain",
                    expected=needed,
                    actual=available,
                )

        output_path = resolve_output_name(
            output_base, header.extension, config.default_output_stem
        )
        logger.info(f"Decoding file data into {output_path}")
        with failure_stage("open_output"), atomic_output(output_path) as sink:
            reader.stream_payload(sink, header.payload_length)

    logger.info("## Decoding done successfully ##")
    return DecodeSummary(
        stego_path=str(stego_path),
        output_path=output_path,
        extension=header.extension,
        payload_size=header.payload_length,
        carrier_bytes_used=reader.carrier_bytes_consumed,
    )
