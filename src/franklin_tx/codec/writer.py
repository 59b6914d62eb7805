"""
Binary Writer

Fixed-width big-endian primitive encoding used by the canonical transaction
encoders. Every method appends exactly the number of bytes its name says;
out-of-range integers are rejected rather than masked.
"""

import struct
from typing import List


class BinaryWriter:
    """
    Append-only byte buffer with fixed-width writers.

    Writers return ``self`` so encoders can chain calls.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> "BinaryWriter":
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.extend(struct.pack('>B', _check_range(v, 8)))
        return self

    def u16be(self, v: int) -> "BinaryWriter":
        """Write unsigned 16-bit integer in big-endian format."""
        self._bb.extend(struct.pack('>H', _check_range(v, 16)))
        return self

    def u32be(self, v: int) -> "BinaryWriter":
        """Write unsigned 32-bit integer in big-endian format."""
        self._bb.extend(struct.pack('>I', _check_range(v, 32)))
        return self

    def u128be(self, v: int) -> "BinaryWriter":
        """
        Write unsigned 128-bit integer in big-endian format.

        Args:
            v: Integer value to write as 16 big-endian bytes
        """
        self._bb.extend(_check_range(v, 128).to_bytes(16, 'big'))
        return self

    def bytes(self, v: bytes) -> "BinaryWriter":
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)
        return self

    def fixed_bytes(self, v: bytes, width: int) -> "BinaryWriter":
        """
        Write raw bytes that must be exactly ``width`` long.

        Raises:
            ValueError: If the length differs
        """
        if len(v) != width:
            raise ValueError(f"Expected {width} bytes, got {len(v)}")
        return self.bytes(v)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)


def _check_range(v: int, bits: int) -> int:
    if not isinstance(v, int) or isinstance(v, bool):
        raise TypeError(f"Expected int, got {type(v).__name__}")
    if v < 0 or v >= 1 << bits:
        raise ValueError(f"Value {v} does not fit in u{bits}")
    return v
