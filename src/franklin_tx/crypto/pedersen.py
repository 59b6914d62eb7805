"""
Pedersen hash over Edwards25519.

``H(m) = len(m) * G_0 + sum(chunk_i(m) * G_{i+1})`` where ``chunk_i`` is the
i-th 31-byte slice of the message read as a little-endian integer. Binding
the length through ``G_0`` keeps messages that differ only by trailing zero
bytes apart.
"""

from __future__ import annotations
from typing import Optional

from ..runtime.errors import MalformedEncodingError
from .curve import point_add, scalar_mult
from .params import CurveParams, get_curve_params

# Compressed encoding of the identity point (x = 0, y = 1).
IDENTITY = b"\x01" + b"\x00" * 31


def pedersen_hash(message: bytes, params: Optional[CurveParams] = None) -> bytes:
    """
    Hash ``message`` to a compressed curve point.

    Raises:
        MalformedEncodingError: If the message is longer than the parameter
            table supports
    """
    params = params or get_curve_params()
    if len(message) > params.pedersen_capacity:
        raise MalformedEncodingError(
            f"Message of {len(message)} bytes exceeds Pedersen capacity of {params.pedersen_capacity}"
        )

    generators = params.pedersen_generators
    acc = scalar_mult(len(message), generators[0])
    step = params.chunk_bytes
    for i in range(0, len(message), step):
        chunk = int.from_bytes(message[i:i + step], "little")
        acc = point_add(acc, scalar_mult(chunk, generators[i // step + 1]))

    return IDENTITY if acc is None else acc


__all__ = ["pedersen_hash", "IDENTITY"]
