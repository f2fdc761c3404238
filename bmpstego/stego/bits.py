"""
LSB Bit Codec.

One data bit is carried in the least significant bit of one carrier byte.
Bit ordering is part of the wire format and is LSB-first: bit 0 of a value
lands in carrier byte 0, bit 1 in carrier byte 1, and so on. A data byte
therefore occupies 8 carrier bytes and a 32-bit length field 32 carrier
bytes. Bits 1-7 of every carrier byte are left untouched.

The scalar functions operate in place on a mutable carrier, the batch
functions (pack_bytes / unpack_bytes) use numpy to process whole payload
chunks with the same ordering.
"""

from typing import MutableSequence, Sequence, Union

import numpy as np

from ..errors import InvalidInputError

BITS_PER_BYTE = 8
BITS_PER_LENGTH = 32
UINT32_MAX = (1 << BITS_PER_LENGTH) - 1

BytesLike = Union[bytes, bytearray, memoryview]


def _pack_bits(value: int, width: int, carrier: MutableSequence[int]) -> None:
    if len(carrier) < width:
        raise InvalidInputError(
            f"Carrier holds {len(carrier)} bytes, {width} required",
            details={"expected": width, "actual": len(carrier)},
        )
    for i in range(width):
        carrier[i] = (carrier[i] & 0xFE) | ((value >> i) & 1)


def _unpack_bits(width: int, carrier: Sequence[int]) -> int:
    if len(carrier) < width:
        raise InvalidInputError(
            f"Carrier holds {len(carrier)} bytes, {width} required",
            details={"expected": width, "actual": len(carrier)},
        )
    value = 0
    for i in range(width):
        value |= (carrier[i] & 1) << i
    return value


def pack_byte(value: int, carrier: MutableSequence[int]) -> None:
    """
    Hide one byte in the LSBs of the first 8 carrier bytes.

    Args:
        value: Byte value in 0..255
        carrier: Mutable sequence of at least 8 byte values, modified in place

    Raises:
        InvalidInputError: If value is out of range or the carrier is short
    """
    if not 0 <= value <= 0xFF:
        raise InvalidInputError(f"Byte value out of range: {value}")
    _pack_bits(value, BITS_PER_BYTE, carrier)


def unpack_byte(carrier: Sequence[int]) -> int:
    """
    Recover one byte from the LSBs of the first 8 carrier bytes.

    Raises:
        InvalidInputError: If the carrier is shorter than 8 bytes
    """
    return _unpack_bits(BITS_PER_BYTE, carrier)


def pack_uint32(value: int, carrier: MutableSequence[int]) -> None:
    """
    Hide an unsigned 32-bit integer in the LSBs of the first 32 carrier bytes.

    Raises:
        InvalidInputError: If value does not fit 32 bits or the carrier is short
    """
    if not 0 <= value <= UINT32_MAX:
        raise InvalidInputError(f"Value out of 32-bit range: {value}")
    _pack_bits(value, BITS_PER_LENGTH, carrier)


def unpack_uint32(carrier: Sequence[int]) -> int:
    """Recover an unsigned 32-bit integer from the first 32 carrier bytes."""
    return _unpack_bits(BITS_PER_LENGTH, carrier)


def pack_bytes(data: BytesLike, carrier: BytesLike) -> bytes:
    """
    Hide a run of data bytes in a carrier chunk.

    Equivalent to calling pack_byte for each data byte over consecutive
    8-byte slices of the carrier, but vectorised.

    Args:
        data: Bytes to hide
        carrier: Clean carrier bytes, at least 8 * len(data) long

    Returns:
        The 8 * len(data) stego bytes.

    Raises:
        InvalidInputError: If the carrier is too short
    """
    needed = len(data) * BITS_PER_BYTE
    if len(carrier) < needed:
        raise InvalidInputError(
            f"Carrier holds {len(carrier)} bytes, {needed} required",
            details={"expected": needed, "actual": len(carrier)},
        )
    if needed == 0:
        return b""

    clean = np.frombuffer(carrier, dtype=np.uint8, count=needed)
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8), bitorder="little")
    return ((clean & 0xFE) | bits).tobytes()


def unpack_bytes(carrier: BytesLike, count: int) -> bytes:
    """
    Recover ``count`` data bytes from the first 8 * count carrier bytes.

    Raises:
        InvalidInputError: If count is negative or the carrier is too short
    """
    if count < 0:
        raise InvalidInputError(f"Byte count must not be negative: {count}")
    needed = count * BITS_PER_BYTE
    if len(carrier) < needed:
        raise InvalidInputError(
            f"Carrier holds {len(carrier)} bytes, {needed} required",
            details={"expected": needed, "actual": len(carrier)},
        )
    if count == 0:
        return b""

    stego = np.frombuffer(carrier, dtype=np.uint8, count=needed)
    return np.packbits(stego & 1, bitorder="little").tobytes()
