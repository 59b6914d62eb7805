"""
Edwards25519 point and scalar operations.

Thin wrappers around libsodium (``nacl.bindings``). Points are 32-byte
compressed encodings; scalars are 32-byte little-endian integers below the
prime subgroup order ``L``.

libsodium's point validation rejects non-canonical encodings, small-order
points and points outside the prime-order subgroup, so every point that
passes ``decode_point`` can be used with the no-clamp multiplication
routines.
"""

from __future__ import annotations
import hashlib
from typing import Optional

import nacl.bindings
import nacl.utils

from ..runtime.errors import InvalidCurveElementError, MalformedEncodingError

POINT_SIZE = 32
SCALAR_SIZE = 32

# Order of the prime-order subgroup.
CURVE_ORDER = 2**252 + 27742317777372353535851937790883648493


def is_valid_point(point: bytes) -> bool:
    """Check if bytes represent a canonical point of the prime-order subgroup."""
    if len(point) != POINT_SIZE:
        return False
    return nacl.bindings.crypto_core_ed25519_is_valid_point(point)


def decode_point(data: bytes, what: str = "point") -> bytes:
    """
    Validate a compressed point.

    Raises:
        MalformedEncodingError: If the length is not 32 bytes
        InvalidCurveElementError: If the bytes are not a legal point
    """
    if len(data) != POINT_SIZE:
        raise MalformedEncodingError(f"{what} must be {POINT_SIZE} bytes, got {len(data)}")
    if not nacl.bindings.crypto_core_ed25519_is_valid_point(data):
        raise InvalidCurveElementError(f"Failed to restore {what}: not a valid curve point")
    return bytes(data)


def decode_scalar(data: bytes, what: str = "scalar") -> int:
    """
    Decode a canonical little-endian scalar.

    Raises:
        MalformedEncodingError: If the length is not 32 bytes
        InvalidCurveElementError: If the value is not below the group order
    """
    if len(data) != SCALAR_SIZE:
        raise MalformedEncodingError(f"{what} must be {SCALAR_SIZE} bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    if value >= CURVE_ORDER:
        raise InvalidCurveElementError(f"Failed to restore {what}: not reduced modulo the group order")
    return value


def encode_scalar(value: int) -> bytes:
    return (value % CURVE_ORDER).to_bytes(SCALAR_SIZE, "little")


def hash_to_scalar(*parts: bytes) -> int:
    """SHA-512 of the concatenated parts, reduced modulo ``L``."""
    digest = hashlib.sha512(b"".join(parts)).digest()
    reduced = nacl.bindings.crypto_core_ed25519_scalar_reduce(digest)
    return int.from_bytes(reduced, "little")


def scalar_mult(scalar: int, point: bytes) -> Optional[bytes]:
    """
    ``scalar * point``; ``None`` stands for the identity.

    ``point`` must already be a valid prime-order point.
    """
    scalar %= CURVE_ORDER
    if scalar == 0:
        return None
    return nacl.bindings.crypto_scalarmult_ed25519_noclamp(encode_scalar(scalar), point)


def point_add(p: Optional[bytes], q: Optional[bytes]) -> Optional[bytes]:
    """Add two points, where ``None`` is the identity."""
    if p is None:
        return q
    if q is None:
        return p
    if p == point_neg(q):
        return None
    return nacl.bindings.crypto_core_ed25519_add(p, q)


def point_neg(p: bytes) -> bytes:
    """Negate a point by flipping the sign bit of x."""
    negated = bytearray(p)
    negated[31] ^= 0x80
    return bytes(negated)


def random_scalar() -> int:
    """Uniformly random non-zero scalar: 64 random bytes reduced modulo ``L``."""
    while True:
        reduced = nacl.bindings.crypto_core_ed25519_scalar_reduce(nacl.utils.random(64))
        value = int.from_bytes(reduced, "little")
        if value:
            return value


__all__ = [
    "POINT_SIZE",
    "SCALAR_SIZE",
    "CURVE_ORDER",
    "is_valid_point",
    "decode_point",
    "decode_scalar",
    "encode_scalar",
    "hash_to_scalar",
    "scalar_mult",
    "point_add",
    "point_neg",
    "random_scalar",
]
