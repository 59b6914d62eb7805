"""
Test binary writer primitives.

Each writer appends a fixed number of big-endian bytes and refuses values
that do not fit instead of masking them.
"""

import pytest

from franklin_tx.codec.writer import BinaryWriter


class TestFixedWidthIntegers:
    """Test u8/u16/u32/u128 big-endian writers."""

    def test_u8(self):
        assert BinaryWriter().u8(0).u8(255).to_bytes() == b"\x00\xff"

    def test_u16be(self):
        assert BinaryWriter().u16be(0x0102).to_bytes() == b"\x01\x02"

    def test_u32be(self):
        assert BinaryWriter().u32be(0x01020304).to_bytes() == b"\x01\x02\x03\x04"

    def test_u128be(self):
        data = BinaryWriter().u128be(1).to_bytes()
        assert len(data) == 16
        assert data == b"\x00" * 15 + b"\x01"

    @pytest.mark.parametrize("method,value", [
        ("u8", 256),
        ("u8", -1),
        ("u16be", 1 << 16),
        ("u32be", 1 << 32),
        ("u128be", 1 << 128),
    ])
    def test_out_of_range_rejected(self, method, value):
        with pytest.raises(ValueError):
            getattr(BinaryWriter(), method)(value)

    def test_bool_is_not_an_integer(self):
        with pytest.raises(TypeError):
            BinaryWriter().u8(True)


class TestRawBytes:
    """Test raw and fixed-width byte writers."""

    def test_chaining_concatenates(self):
        data = BinaryWriter().u8(5).bytes(b"ab").u16be(7).to_bytes()
        assert data == b"\x05ab\x00\x07"

    def test_fixed_bytes_accepts_exact_width(self):
        assert BinaryWriter().fixed_bytes(b"\x11" * 4, 4).to_bytes() == b"\x11" * 4

    def test_fixed_bytes_rejects_other_width(self):
        with pytest.raises(ValueError):
            BinaryWriter().fixed_bytes(b"\x11" * 3, 4)
