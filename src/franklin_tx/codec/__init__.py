"""
Franklin Binary Codec Module

Fixed-width primitives and amount packing used by the canonical transaction
encoders.

Key components:
- writer.py: Big-endian fixed-width binary writer
- amounts.py: Fee/token decimal packers and the u128 withdraw conversion
- hashes.py: SHA-256 hashing helpers
"""

from .hashes import sha256_bytes
from .writer import BinaryWriter
from .amounts import (
    FEE_FORMAT,
    TOKEN_FORMAT,
    PackedFloatFormat,
    amount_to_u128,
    closest_packable_fee,
    closest_packable_token,
    is_fee_packable,
    is_token_packable,
    pack_fee,
    pack_token,
    unpack_fee,
    unpack_token,
)

__all__ = [
    "BinaryWriter",
    "sha256_bytes",
    "FEE_FORMAT",
    "TOKEN_FORMAT",
    "PackedFloatFormat",
    "amount_to_u128",
    "closest_packable_fee",
    "closest_packable_token",
    "is_fee_packable",
    "is_token_packable",
    "pack_fee",
    "pack_token",
    "unpack_fee",
    "unpack_token",
]
