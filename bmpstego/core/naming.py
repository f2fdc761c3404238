"""
File naming rules.

The stored extension comes from the secret file's name; on decode the
output name is the user's base name (or a default stem) with everything from
its first dot removed, followed by the decoded extension.
"""

import os
from typing import Optional

from ..config import DEFAULT_CONFIG, StegoConfig
from ..errors import ExtensionTooLongError, InvalidInputError
from ..stego.container import is_valid_extension


def secret_extension(path: str, config: Optional[StegoConfig] = None) -> str:
    """
    Extension of a secret file, including its leading dot.

    Taken from the last dot of the file name; directory components are
    ignored.

    Raises:
        InvalidInputError: If the name has no extension or it is not printable ASCII
        ExtensionTooLongError: If it does not fit the extension field
    """
    config = config or DEFAULT_CONFIG
    name = os.path.basename(path)
    dot = name.rfind(".")
    if dot < 0 or dot == len(name) - 1:
        raise InvalidInputError(f"Secret file name has no extension: {name}")

    extension = name[dot:]
    if not is_valid_extension(extension):
        raise InvalidInputError(f"Secret file extension is not printable ASCII: {extension!r}")
    if len(extension) > config.max_extension_length:
        raise ExtensionTooLongError(len(extension), config.max_extension_length)
    return extension


def resolve_output_name(
    base: Optional[str],
    extension: str,
    default_stem: Optional[str] = None,
) -> str:
    """
    Build the decoded file's name.

    Examples:
        >>> resolve_output_name(None, ".txt")
        'decoded.txt'
        >>> resolve_output_name("report.pdf", ".txt")
        'report.txt'
        >>> resolve_output_name("out/.", ".txt")
        'out/decoded.txt'
    """
    if default_stem is None:
        default_stem = DEFAULT_CONFIG.default_output_stem
    if not base:
        return default_stem + extension

    directory, name = os.path.split(base)
    tokens = [token for token in name.split(".") if token]
    stem = tokens[0] if tokens else default_stem
    return os.path.join(directory, stem + extension)
