"""
Cryptographic primitives for the Franklin transaction layer.

Provides Edwards25519 curve operations (libsodium via PyNaCl), the shared
curve parameter table, the Pedersen hash and musig-style Schnorr keys and
signatures.
"""

from .curve import CURVE_ORDER, POINT_SIZE, SCALAR_SIZE, is_valid_point
from .params import CurveParams, get_curve_params
from .pedersen import pedersen_hash
from .eddsa import MusigVariant, PrivateKey, PublicKey, Signature, SIGNATURE_SIZE

__all__ = [
    "CURVE_ORDER",
    "POINT_SIZE",
    "SCALAR_SIZE",
    "SIGNATURE_SIZE",
    "is_valid_point",
    "CurveParams",
    "get_curve_params",
    "pedersen_hash",
    "MusigVariant",
    "PrivateKey",
    "PublicKey",
    "Signature",
]
