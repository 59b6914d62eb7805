"""
Process-wide curve parameters.

The table holds the fixed generator used for spending-key signatures and the
generators of the Pedersen hash. It is built once, on first use, and is
read-only afterwards; verification functions take it as an explicit
``params`` argument defaulting to ``get_curve_params()``.
"""

from __future__ import annotations
import functools
import hashlib
import logging
import struct
from dataclasses import dataclass
from typing import Tuple

from .curve import CURVE_ORDER, is_valid_point

logger = logging.getLogger(__name__)

SPENDING_KEY_PERSONALIZATION = b"Franklin_SpendingKeyGenerator"
PEDERSEN_PERSONALIZATION = b"Franklin_PedersenHashGenerators"

PEDERSEN_GENERATOR_COUNT = 64
# 31 bytes keeps every chunk scalar below the group order.
PEDERSEN_CHUNK_BYTES = 31

MAX_HASH_TO_POINT_ATTEMPTS = 4096


def hash_to_point(personalization: bytes, index: int = 0) -> bytes:
    """
    Derive a prime-order point with no known discrete log.

    Try-and-increment: hash (personalization, index, counter) until the digest
    decodes to a valid point of the prime-order subgroup.
    """
    for counter in range(MAX_HASH_TO_POINT_ATTEMPTS):
        candidate = hashlib.sha256(personalization + struct.pack('<II', index, counter)).digest()
        if is_valid_point(candidate):
            return candidate
    raise RuntimeError(f"hash_to_point failed for {personalization!r}/{index}")


@dataclass(frozen=True)
class CurveParams:
    """Immutable generator table."""

    spending_key_generator: bytes
    pedersen_generators: Tuple[bytes, ...]
    order: int = CURVE_ORDER
    chunk_bytes: int = PEDERSEN_CHUNK_BYTES

    @property
    def pedersen_capacity(self) -> int:
        """Longest message, in bytes, the Pedersen hash accepts."""
        # generator 0 binds the message length
        return (len(self.pedersen_generators) - 1) * self.chunk_bytes

    @classmethod
    def generate(cls, generator_count: int = PEDERSEN_GENERATOR_COUNT) -> CurveParams:
        if generator_count < 2:
            raise ValueError("Pedersen hash needs at least 2 generators")
        generators = tuple(
            hash_to_point(PEDERSEN_PERSONALIZATION, i) for i in range(generator_count)
        )
        params = cls(
            spending_key_generator=hash_to_point(SPENDING_KEY_PERSONALIZATION),
            pedersen_generators=generators,
        )
        logger.debug(
            f"Curve parameters ready: spending key generator {params.spending_key_generator.hex()}, "
            f"{generator_count} Pedersen generators"
        )
        return params


@functools.lru_cache(maxsize=None)
def get_curve_params() -> CurveParams:
    """Shared parameter table, built on first call."""
    return CurveParams.generate()


__all__ = [
    "CurveParams",
    "get_curve_params",
    "hash_to_point",
    "PEDERSEN_CHUNK_BYTES",
    "PEDERSEN_GENERATOR_COUNT",
]
