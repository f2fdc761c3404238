"""
File handle helpers shared by the pipelines.

Handles are registered on an ExitStack so every one opened by an operation
is closed on every exit path. Outputs are written through a temporary file
next to the target and renamed into place only once complete, so a failed
operation never leaves a finished-looking file behind.
"""

import logging
import os
import tempfile
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from ..errors import FileOpenError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _reason(error: Exception) -> str:
    return getattr(error, "strerror", None) or str(error)


def open_binary(path: PathLike, stack: ExitStack, mode: str = "rb") -> BinaryIO:
    """
    Open ``path`` and register it on ``stack``.

    Raises:
        FileOpenError: If the file cannot be opened or the path is malformed
    """
    try:
        handle = open(path, mode)
    except (OSError, ValueError) as e:
        raise FileOpenError(str(path), _reason(e))
    logger.info(f"Opened {path}")
    return stack.enter_context(handle)


def file_size(handle: BinaryIO) -> int:
    return os.fstat(handle.fileno()).st_size


def _default_mode() -> int:
    # Permissions a plain open() would have given the file
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_output(path: PathLike) -> Iterator[BinaryIO]:
    """
    Yield a writable handle whose content replaces ``path`` on success.

    The temporary file gets a unique name in the target's directory, so no
    existing file other than ``path`` is ever touched. On any exception the
    temporary file is removed and the exception propagates; an existing file
    at ``path`` is left untouched.

    Raises:
        FileOpenError: If the temporary file cannot be created
    """
    path = Path(path)

    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f"{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
    except (OSError, ValueError) as e:
        raise FileOpenError(str(path), _reason(e))
    temp_path = Path(temp_name)

    try:
        with os.fdopen(fd, "wb") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_path, _default_mode())
        temp_path.replace(path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        logger.debug(f"Removed incomplete output {temp_path}")
        raise
