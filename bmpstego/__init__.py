"""
bmpstego Package

This package hides an arbitrary file inside the pixel data of an
uncompressed 24-bit BMP image using least significant bit substitution,
and recovers it byte for byte.

Modules:
    errors: StegoError hierarchy and ErrorKind tags
    config: StegoConfig format constants and defaults
    cli: bmpstego command line interface

Subpackages:
    stego: Bit codec and embedded container format
    core: BMP geometry, capacity planning, file naming, the encode/decode
          pipelines and the StegoManager facade (re-exports errors and config)

Version: 1.0.0
"""

from . import stego
from . import core
from .core import (
    StegoConfig,
    StegoError,
    StegoManager,
    StegoResult,
    decode_file,
    encode_file,
)

__all__ = [
    'stego',
    'core',
    'StegoConfig',
    'StegoError',
    'StegoManager',
    'StegoResult',
    'decode_file',
    'encode_file',
]

__version__ = "1.0.0"
