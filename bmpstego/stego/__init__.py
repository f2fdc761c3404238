"""
Steganography format layer.

Modules:
    bits: LSB bit codec (one data bit per carrier byte, LSB-first)
    container: Embedded container layout, reader and writer

Usage:
    >>> from bmpstego.stego import pack_byte, unpack_byte
    >>> carrier = bytearray(8)
    >>> pack_byte(0x41, carrier)
    >>> unpack_byte(carrier)
    65
"""

from .bits import (
    pack_byte,
    pack_bytes,
    pack_uint32,
    unpack_byte,
    unpack_bytes,
    unpack_uint32,
)
from .container import ContainerHeader, ContainerReader, ContainerWriter, is_valid_extension

__all__ = [
    "pack_byte",
    "pack_bytes",
    "pack_uint32",
    "unpack_byte",
    "unpack_bytes",
    "unpack_uint32",
    "ContainerHeader",
    "ContainerReader",
    "ContainerWriter",
    "is_valid_extension",
]
