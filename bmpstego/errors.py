"""
Error types for BMP steganography.

Every failure raised by the codec, the container format or the pipelines is
a StegoError subclass tagged with an ErrorKind, so callers can branch on the
cause instead of parsing messages. The stage that failed (``open_files``,
``signature``, ``payload`` ...) travels in ``details["stage"]``.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Optional


class ErrorKind(Enum):
    """Failure causes surfaced by encode and decode operations."""

    ARGUMENT = "argument"
    FILE_OPEN = "file_open"
    INVALID_INPUT = "invalid_input"
    EMPTY_SECRET = "empty_secret"
    INSUFFICIENT_CAPACITY = "insufficient_capacity"
    ENCODE = "encode"
    NOT_STEGANOGRAPHIC = "not_steganographic"
    CORRUPT_CONTAINER = "corrupt_container"
    EXTENSION_TOO_LONG = "extension_too_long"
    TRUNCATED_READ = "truncated_read"
    TRUNCATED_STEGO_IMAGE = "truncated_stego_image"
    IO = "io"


class StegoError(Exception):
    """
    Base exception for steganography errors.

    Attributes:
        message: Human readable description
        code: Optional numeric code
        details: Extra context (offending values, the failing stage)
    """

    kind = ErrorKind.IO

    def __init__(self, message: str, code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    @property
    def stage(self) -> Optional[str]:
        """Pipeline stage that raised the error, if known."""
        return self.details.get("stage")

    def with_stage(self, stage: str) -> "StegoError":
        """Record the failing stage unless an inner stage was already set."""
        self.details.setdefault("stage", stage)
        return self

    def __str__(self) -> str:
        base = f"{type(self).__name__}: {self.message}"
        if self.code:
            base += f" (Code: {self.code})"
        return base


class ArgumentError(StegoError):
    """Bad command line usage."""

    kind = ErrorKind.ARGUMENT


class FileOpenError(StegoError):
    """A path could not be opened for reading or writing."""

    kind = ErrorKind.FILE_OPEN

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Unable to open file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"path": path})


class InvalidInputError(StegoError):
    """A value handed to the codec or the pipelines is out of range."""

    kind = ErrorKind.INVALID_INPUT


class EmptySecretFileError(StegoError):
    """The secret file has no content to hide."""

    kind = ErrorKind.EMPTY_SECRET


class InsufficientCapacityError(StegoError):
    """Cover image too small for the secret file."""

    kind = ErrorKind.INSUFFICIENT_CAPACITY

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Need {required} bytes, have {available} bytes",
            details={"required": required, "available": available},
        )


class EncodeError(StegoError):
    """The container could not be written in full."""

    kind = ErrorKind.ENCODE


class NotSteganographicImageError(StegoError):
    """The image does not start with the container signature."""

    kind = ErrorKind.NOT_STEGANOGRAPHIC


class CorruptContainerError(StegoError):
    """A decoded field holds an implausible value."""

    kind = ErrorKind.CORRUPT_CONTAINER


class ExtensionTooLongError(StegoError):
    """The file extension does not fit the extension field."""

    kind = ErrorKind.EXTENSION_TOO_LONG

    def __init__(self, length: int, maximum: int):
        self.length = length
        self.maximum = maximum
        super().__init__(
            f"Extension length {length} exceeds maximum of {maximum}",
            details={"length": length, "maximum": maximum},
        )


class TruncatedReadError(StegoError):
    """Fewer bytes were available than a read required."""

    kind = ErrorKind.TRUNCATED_READ

    def __init__(self, message: str, expected: int = 0, actual: int = 0):
        self.expected = expected
        self.actual = actual
        super().__init__(message, details={"expected": expected, "actual": actual})


class TruncatedStegoImageError(TruncatedReadError):
    """The stego image ended before the container did."""

    kind = ErrorKind.TRUNCATED_STEGO_IMAGE


class StegoIOError(StegoError):
    """An underlying read or write failed."""

    kind = ErrorKind.IO


@contextmanager
def failure_stage(stage: str) -> Iterator[None]:
    """
    Tag errors raised inside the block with the pipeline stage name.

    StegoErrors keep their kind and gain ``details["stage"]``; OSErrors are
    wrapped as StegoIOError so callers only ever see StegoError.
    """
    try:
        yield
    except StegoError as e:
        e.with_stage(stage)
        raise
    except OSError as e:
        raise StegoIOError(f"I/O failure during {stage}: {e}", details={"stage": stage}) from e
