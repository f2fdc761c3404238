"""
Unified steganography manager.

Wraps the encode and decode pipelines behind a single API that reports
outcomes as StegoResult values instead of exceptions, tagged with the
failing stage and ErrorKind.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import ErrorKind, StegoError
from .bmp import describe_image
from .decoder import decode_file
from .encoder import encode_file
from .files import PathLike

logger = logging.getLogger(__name__)


@dataclass
class StegoResult:
    """
    Result of a steganography operation.

    Attributes:
        success: Whether the operation completed
        operation: "embed", "extract" or "inspect"
        message: Human-readable status or error message
        output_path: File produced on success
        error_kind: Failure cause when success is False
        stage: Pipeline stage that failed
        capacity_used: Carrier bytes holding the container
        capacity_total: Carrier bytes available in the image
        details: Operation specific extras
    """

    success: bool
    operation: str
    message: str
    output_path: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    stage: Optional[str] = None
    capacity_used: int = 0
    capacity_total: int = 0
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, operation: str, error: StegoError) -> "StegoResult":
        return cls(
            success=False,
            operation=operation,
            message=error.message,
            error_kind=error.kind,
            stage=error.stage,
            details=dict(error.details),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-serialisable dictionary."""
        return {
            'success': self.success,
            'operation': self.operation,
            'message': self.message,
            'output_path': self.output_path,
            'error_kind': self.error_kind.value if self.error_kind else None,
            'stage': self.stage,
            'capacity_used': self.capacity_used,
            'capacity_total': self.capacity_total,
        }


class StegoManager:
    """
    Single entry point for embedding, extracting and inspecting.

    Example:
        >>> manager = StegoManager()
        >>> result = manager.embed("cover.bmp", "secret.txt", "stego.bmp")
        >>> if not result.success:
        ...     print(result.stage, result.message)
        >>> result = manager.extract("stego.bmp", "recovered")
        >>> print(result.output_path)
        recovered.txt
    """

    def __init__(self, config: Optional[StegoConfig] = None):
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> StegoConfig:
        return self._config

    def embed(
        self,
        cover_path: PathLike,
        secret_path: PathLike,
        stego_path: Optional[PathLike] = None,
    ) -> StegoResult:
        """Hide a file in a cover image."""
        try:
            summary = encode_file(cover_path, secret_path, stego_path, self._config)
        except StegoError as e:
            logger.error(f"Encoding failed at {e.stage or 'unknown stage'}: {e.message}")
            return StegoResult.failure("embed", e)

        return StegoResult(
            success=True,
            operation="embed",
            message=f"Hid {summary.payload_size} bytes ({summary.extension}) in {summary.stego_path}",
            output_path=summary.stego_path,
            capacity_used=summary.carrier_bytes_used,
            capacity_total=summary.pixel_capacity,
            details={'extension': summary.extension, 'payload_size': summary.payload_size},
        )

    def extract(self, stego_path: PathLike, output_base: Optional[str] = None) -> StegoResult:
        """Recover the file hidden in a stego image."""
        try:
            summary = decode_file(stego_path, output_base, self._config)
        except StegoError as e:
            logger.error(f"Decoding failed at {e.stage or 'unknown stage'}: {e.message}")
            return StegoResult.failure("extract", e)

        return StegoResult(
            success=True,
            operation="extract",
            message=f"Recovered {summary.payload_size} bytes into {summary.output_path}",
            output_path=summary.output_path,
            capacity_used=summary.carrier_bytes_used,
            details={'extension': summary.extension, 'payload_size': summary.payload_size},
        )

    def inspect(self, image_path: PathLike) -> StegoResult:
        """Report format and hiding capacity of an image."""
        try:
            info = describe_image(str(image_path), self._config)
        except StegoError as e:
            return StegoResult.failure("inspect", e)

        return StegoResult(
            success=True,
            operation="inspect",
            message=f"{info['width']}x{info['height']}, can hide up to {info['max_secret_size']} bytes",
            capacity_total=info['pixel_capacity'],
            details=info,
        )
