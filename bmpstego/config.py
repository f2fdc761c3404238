"""
Configuration for the container format and the pipelines.
"""

from dataclasses import dataclass

from .errors import InvalidInputError


@dataclass(frozen=True)
class StegoConfig:
    """
    Format constants and pipeline defaults.

    Attributes:
        signature: Marker embedded first, identifies the container format
        header_size: Bytes of BMP header copied verbatim / skipped
        capacity_overhead: Fixed metadata allowance used by the capacity check
        max_extension_length: Longest extension (with its dot) that can be stored
        max_plausible_extension_length: Upper bound on a decoded extension length
            field before the container is treated as noise
        default_stego_name: Output image name when none is given
        default_output_stem: Decoded file stem when none is given
        chunk_size: Data bytes processed per payload batch
    """

    signature: bytes = b"#*"
    header_size: int = 54
    capacity_overhead: int = 14
    max_extension_length: int = 4
    max_plausible_extension_length: int = 10
    default_stego_name: str = "stego.bmp"
    default_output_stem: str = "decoded"
    chunk_size: int = 512

    def __post_init__(self):
        if not self.signature:
            raise InvalidInputError("Signature must not be empty")
        try:
            self.signature.decode("ascii")
        except UnicodeDecodeError:
            raise InvalidInputError("Signature must be ASCII")
        if self.header_size < 26:
            raise InvalidInputError(f"Header size {self.header_size} cannot hold width and height")
        if self.chunk_size <= 0:
            raise InvalidInputError(f"Chunk size must be positive, got {self.chunk_size}")
        if not 0 < self.max_extension_length <= self.max_plausible_extension_length:
            raise InvalidInputError(
                f"max_extension_length must be in 1..{self.max_plausible_extension_length}"
            )

    @property
    def signature_length(self) -> int:
        return len(self.signature)

    @property
    def fixed_overhead_bytes(self) -> int:
        return self.capacity_overhead


DEFAULT_CONFIG = StegoConfig()
