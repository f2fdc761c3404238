"""
Unit Tests for the LSB Bit Codec

Covers the scalar byte and 32-bit field codecs, their batch equivalents,
and the LSB-first bit ordering that the container format depends on.
"""

import pytest
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bmpstego.errors import ErrorKind, InvalidInputError
from bmpstego.stego.bits import (
    pack_byte,
    pack_bytes,
    pack_uint32,
    unpack_byte,
    unpack_bytes,
    unpack_uint32,
)


class TestByteCodec:
    """Test cases for single byte packing."""

    def test_round_trip_every_byte(self):
        """Every byte value survives pack/unpack over a noisy carrier."""
        noise = bytearray(os.urandom(8))
        for value in range(256):
            carrier = bytearray(noise)
            pack_byte(value, carrier)
            assert unpack_byte(carrier) == value

    def test_high_bits_untouched(self):
        """Only bit 0 of each carrier byte may change."""
        original = bytearray([0xFF, 0x00, 0xAA, 0x55, 0x81, 0x7E, 0x10, 0xEF])
        carrier = bytearray(original)

        pack_byte(0xC3, carrier)

        for before, after in zip(original, carrier):
            assert before & 0xFE == after & 0xFE

    def test_lsb_first_ordering(self):
        """Bit 0 of the value lands in the first carrier byte."""
        carrier = bytearray(8)
        pack_byte(0x01, carrier)
        assert list(carrier) == [1, 0, 0, 0, 0, 0, 0, 0]

        carrier = bytearray(8)
        pack_byte(0x80, carrier)
        assert list(carrier) == [0, 0, 0, 0, 0, 0, 0, 1]

    def test_only_first_eight_bytes_used(self):
        """Carrier bytes beyond the eighth are left alone."""
        carrier = bytearray([0xFF] * 10)
        pack_byte(0x00, carrier)
        assert carrier[8:] == bytearray([0xFF, 0xFF])

    def test_unpack_short_carrier(self):
        """Unpacking from fewer than 8 bytes is invalid input."""
        with pytest.raises(InvalidInputError) as exc_info:
            unpack_byte(b"\x01" * 7)
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_pack_rejects_out_of_range_value(self):
        """Only values 0..255 are bytes."""
        with pytest.raises(InvalidInputError):
            pack_byte(256, bytearray(8))
        with pytest.raises(InvalidInputError):
            pack_byte(-1, bytearray(8))


class TestUint32Codec:
    """Test cases for 32-bit length fields."""

    @pytest.mark.parametrize("value", [0, 1, 4, 0x1234, 0x7FFFFFFF, 0x80000000, 0xFFFFFFFF])
    def test_round_trip(self, value):
        """32-bit values survive pack/unpack."""
        carrier = bytearray(os.urandom(32))
        pack_uint32(value, carrier)
        assert unpack_uint32(carrier) == value

    def test_lsb_first_ordering(self):
        """Value 4 sets only the LSB of the third carrier byte."""
        carrier = bytearray(32)
        pack_uint32(4, carrier)
        assert [b & 1 for b in carrier] == [0, 0, 1] + [0] * 29

    def test_rejects_values_over_32_bits(self):
        """Values that need 33 bits are rejected."""
        with pytest.raises(InvalidInputError):
            pack_uint32(1 << 32, bytearray(32))

    def test_short_carrier(self):
        """A 31-byte carrier cannot hold a length field."""
        with pytest.raises(InvalidInputError):
            pack_uint32(1, bytearray(31))
        with pytest.raises(InvalidInputError):
            unpack_uint32(bytes(31))


class TestBatchCodec:
    """Test cases for vectorised packing."""

    def test_matches_scalar_codec(self):
        """pack_bytes produces the same bytes as repeated pack_byte."""
        data = b"batch \x00\xff payload"
        carrier = os.urandom(len(data) * 8)

        expected = bytearray(carrier)
        for i, value in enumerate(data):
            chunk = expected[i * 8:(i + 1) * 8]
            pack_byte(value, chunk)
            expected[i * 8:(i + 1) * 8] = chunk

        assert pack_bytes(data, carrier) == bytes(expected)

    def test_round_trip(self):
        """unpack_bytes recovers what pack_bytes hid."""
        data = bytes(range(256))
        stego = pack_bytes(data, os.urandom(len(data) * 8 + 5))
        assert len(stego) == len(data) * 8
        assert unpack_bytes(stego, len(data)) == data

    def test_empty_data(self):
        """Nothing in, nothing out."""
        assert pack_bytes(b"", b"") == b""
        assert unpack_bytes(b"", 0) == b""

    def test_short_carrier(self):
        """The carrier must provide 8 bytes per data byte."""
        with pytest.raises(InvalidInputError):
            pack_bytes(b"ab", bytes(15))
        with pytest.raises(InvalidInputError):
            unpack_bytes(bytes(15), 2)

    def test_negative_count(self):
        """A negative byte count is invalid."""
        with pytest.raises(InvalidInputError):
            unpack_bytes(bytes(8), -1)
