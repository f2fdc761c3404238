"""
Embedded Container Format.

The container is the self-describing stream hidden in the pixel LSBs. Its
fields, in order, each spread one bit per carrier byte (LSB-first):

    +-------------+-----------------------+---------------------------------+
    | Field       | Carrier bytes         | Content                         |
    +-------------+-----------------------+---------------------------------+
    | signature   | 8 * len(signature)    | ASCII marker ("#*")             |
    | ext_len     | 32                    | uint32, length of extension     |
    | extension   | 8 * ext_len           | ASCII, includes the leading dot |
    | payload_len | 32                    | uint32, secret size in bytes    |
    | payload     | 8 * payload_len       | raw secret bytes                |
    +-------------+-----------------------+---------------------------------+

ContainerWriter consumes clean carrier bytes from a source stream and emits
stego bytes to a sink in the same chunk sizes; ContainerReader mirrors it
over a stego stream positioned past the image header. Neither class buffers
the payload in full.
"""

import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import (
    CorruptContainerError,
    EncodeError,
    ExtensionTooLongError,
    InvalidInputError,
    NotSteganographicImageError,
    TruncatedStegoImageError,
    failure_stage,
)
from .bits import (
    BITS_PER_BYTE,
    BITS_PER_LENGTH,
    pack_bytes,
    pack_uint32,
    unpack_bytes,
    unpack_uint32,
)

logger = logging.getLogger(__name__)

# Characters that would change the meaning of the output path
_PATH_SEPARATORS = "/\\"


def is_valid_extension(extension: str) -> bool:
    """
    Whether ``extension`` can be stored and later used in a file name.

    It must be a dot followed by at least one printable ASCII character,
    none of them a path separator.
    """
    if len(extension) < 2 or extension[0] != ".":
        return False
    return all(
        " " <= char <= "~" and char not in _PATH_SEPARATORS
        for char in extension[1:]
    )


@dataclass
class ContainerHeader:
    """
    Metadata fields of an embedded container.

    Attributes:
        extension: Secret file extension including its leading dot
        payload_length: Secret file size in bytes
    """

    extension: str
    payload_length: int

    @property
    def extension_bytes(self) -> bytes:
        if not is_valid_extension(self.extension):
            raise InvalidInputError(f"Not a storable extension: {self.extension!r}")
        return self.extension.encode("ascii")

    def carrier_bytes_required(self, signature_length: int) -> int:
        """Exact number of carrier bytes the container occupies."""
        data_bytes = signature_length + len(self.extension_bytes) + self.payload_length
        return data_bytes * BITS_PER_BYTE + 2 * BITS_PER_LENGTH


class ContainerWriter:
    """
    Writes a container into a stream of carrier bytes.

    Every data byte consumes 8 fresh bytes from ``source`` and every length
    field 32; the modified bytes are written to ``sink``. A short read from
    the source or a short write to the sink raises EncodeError.

    Example:
        >>> writer = ContainerWriter(cover_pixels, stego_out)
        >>> writer.write_header(ContainerHeader(".txt", 2))
        >>> writer.write_payload(secret, 2)
        >>> writer.copy_remaining()
    """

    def __init__(self, source: BinaryIO, sink: BinaryIO, config: Optional[StegoConfig] = None):
        self._source = source
        self._sink = sink
        self._config = config or DEFAULT_CONFIG
        self.carrier_bytes_consumed = 0
        self.carrier_bytes_copied = 0

    def _read_carrier(self, size: int) -> bytes:
        chunk = self._source.read(size)
        if len(chunk) != size:
            raise EncodeError(
                f"Cover image ran out of pixel data: needed {size} bytes, got {len(chunk)}",
                details={"expected": size, "actual": len(chunk)},
            )
        return chunk

    def _emit(self, chunk: bytes) -> None:
        written = self._sink.write(chunk)
        if written is not None and written != len(chunk):
            raise EncodeError(
                f"Short write to stego image: {written} of {len(chunk)} bytes",
                details={"expected": len(chunk), "actual": written},
            )

    def write_data(self, data: bytes) -> None:
        """Hide ``data`` at 8 carrier bytes per data byte."""
        if not data:
            return
        carrier = self._read_carrier(len(data) * BITS_PER_BYTE)
        self._emit(pack_bytes(data, carrier))
        self.carrier_bytes_consumed += len(carrier)

    def write_length(self, value: int) -> None:
        """Hide an unsigned 32-bit field in 32 carrier bytes."""
        carrier = bytearray(self._read_carrier(BITS_PER_LENGTH))
        pack_uint32(value, carrier)
        self._emit(bytes(carrier))
        self.carrier_bytes_consumed += len(carrier)

    def write_signature(self) -> None:
        with failure_stage("signature"):
            self.write_data(self._config.signature)

    def write_header(self, header: ContainerHeader) -> None:
        """Write signature, extension length, extension and payload length."""
        extension = header.extension_bytes
        if len(extension) > self._config.max_extension_length:
            raise ExtensionTooLongError(
                len(extension), self._config.max_extension_length
            ).with_stage("extension_size")

        logger.info("Encoding signature")
        self.write_signature()

        logger.info(f"Encoding extension size ({len(extension)})")
        with failure_stage("extension_size"):
            self.write_length(len(extension))

        logger.info(f"Encoding extension {header.extension}")
        with failure_stage("extension"):
            self.write_data(extension)

        logger.info(f"Encoding payload size ({header.payload_length} bytes)")
        with failure_stage("payload_size"):
            self.write_length(header.payload_length)

    def write_payload(self, stream: BinaryIO, length: int) -> int:
        """
        Hide exactly ``length`` bytes read from ``stream``.

        The payload is processed in batches of ``config.chunk_size`` data
        bytes so memory use does not grow with the secret size.

        Returns:
            Number of payload bytes written.

        Raises:
            EncodeError: If the stream ends early or the cover runs out
        """
        remaining = length
        with failure_stage("payload"):
            while remaining > 0:
                data = stream.read(min(self._config.chunk_size, remaining))
                if not data:
                    raise EncodeError(
                        f"Secret file ended after {length - remaining} of {length} bytes",
                        details={"expected": length, "actual": length - remaining},
                    )
                self.write_data(data)
                remaining -= len(data)
        return length

    def copy_remaining(self) -> int:
        """Copy every carrier byte not yet consumed, unmodified."""
        chunk_size = self._config.chunk_size * BITS_PER_BYTE
        with failure_stage("copy_tail"):
            while True:
                chunk = self._source.read(chunk_size)
                if not chunk:
                    break
                self._emit(chunk)
                self.carrier_bytes_copied += len(chunk)
        return self.carrier_bytes_copied


class ContainerReader:
    """
    Reads a container from a stream of stego carrier bytes.

    The stream must already be positioned past the image header. Any short
    read raises TruncatedStegoImageError.
    """

    def __init__(self, source: BinaryIO, config: Optional[StegoConfig] = None):
        self._source = source
        self._config = config or DEFAULT_CONFIG
        self.carrier_bytes_consumed = 0

    def _read_carrier(self, size: int) -> bytes:
        chunk = self._source.read(size)
        if len(chunk) != size:
            raise TruncatedStegoImageError(
                f"Stego image ended early: needed {size} bytes, got {len(chunk)}",
                expected=size,
                actual=len(chunk),
            )
        self.carrier_bytes_consumed += size
        return chunk

    def read_data(self, count: int) -> bytes:
        """Recover ``count`` data bytes (8 carrier bytes each)."""
        return unpack_bytes(self._read_carrier(count * BITS_PER_BYTE), count)

    def read_length(self) -> int:
        """Recover an unsigned 32-bit field."""
        return unpack_uint32(self._read_carrier(BITS_PER_LENGTH))

    def read_signature(self) -> None:
        """
        Verify the container signature.

        Raises:
            NotSteganographicImageError: If the decoded marker does not match
        """
        with failure_stage("signature"):
            found = self.read_data(self._config.signature_length)
            if found != self._config.signature:
                raise NotSteganographicImageError(
                    "Signature mismatch: image carries no hidden file",
                    details={"found": found.hex()},
                )

    def read_extension_length(self) -> int:
        config = self._config
        with failure_stage("extension_size"):
            length = self.read_length()
            logger.debug(f"Decoded extension length {length}")
            if length <= 0 or length > config.max_plausible_extension_length:
                raise CorruptContainerError(
                    f"Implausible extension length {length}",
                    details={"length": length},
                )
            if length > config.max_extension_length:
                raise ExtensionTooLongError(length, config.max_extension_length)
        return length

    def read_extension(self, length: int) -> str:
        with failure_stage("extension"):
            raw = self.read_data(length)
            extension = raw.decode("ascii", errors="replace")
            if not is_valid_extension(extension):
                raise CorruptContainerError(
                    "Extension is not a printable file suffix", details={"raw": raw.hex()}
                )
        return extension

    def read_payload_length(self) -> int:
        with failure_stage("payload_size"):
            return self.read_length()

    def read_header(self) -> ContainerHeader:
        """Read and validate every field ahead of the payload."""
        logger.info("Decoding signature")
        self.read_signature()

        logger.info("Decoding extension size")
        length = self.read_extension_length()

        logger.info("Decoding extension")
        extension = self.read_extension(length)
        logger.debug(f"Extension = {extension}")

        logger.info("Decoding payload size")
        payload_length = self.read_payload_length()
        logger.debug(f"Payload size = {payload_length} bytes")

        return ContainerHeader(extension=extension, payload_length=payload_length)

    def stream_payload(self, sink: BinaryIO, length: int) -> int:
        """
        Decode ``length`` payload bytes, writing each batch to ``sink`` as
        soon as it is recovered.

        Returns:
            Number of payload bytes written.
        """
        remaining = length
        with failure_stage("payload"):
            while remaining > 0:
                count = min(self._config.chunk_size, remaining)
                sink.write(self.read_data(count))
                remaining -= count
        return length
