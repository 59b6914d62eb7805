r"""
Musig-style Schnorr signatures over Edwards25519.

Public keys are ``A = a * G`` where ``G`` is the spending-key generator from
the curve parameter table. A signature is ``(R, s)`` and verifies when

    s * G == R + c * A

The challenge ``c`` has two constructions that share this equation:

- musig-pedersen: ``c = H*("musig_pedersen" || R || A || pedersen_hash(msg))``
- musig-sha256:   ``c = H*("musig_sha256" || R || A || sha256(msg))``

with ``H*`` = SHA-512 reduced modulo the group order.
"""

from __future__ import annotations
import hashlib
import logging
from enum import Enum
from typing import Optional, Union

from typing_extensions import assert_never

from ..runtime.errors import InvalidCurveElementError, MalformedEncodingError, decode_hex
from .curve import (
    CURVE_ORDER,
    POINT_SIZE,
    SCALAR_SIZE,
    decode_point,
    decode_scalar,
    encode_scalar,
    hash_to_scalar,
    point_add,
    random_scalar,
    scalar_mult,
)
from .params import CurveParams, get_curve_params
from .pedersen import pedersen_hash

logger = logging.getLogger(__name__)

SIGNATURE_SIZE = POINT_SIZE + SCALAR_SIZE


class MusigVariant(str, Enum):
    """Challenge construction; values are the wire names."""

    PEDERSEN = "MusigPedersen"
    SHA256 = "MusigSha256"

    @property
    def domain(self) -> bytes:
        if self is MusigVariant.PEDERSEN:
            return b"musig_pedersen"
        if self is MusigVariant.SHA256:
            return b"musig_sha256"
        assert_never(self)


def _message_digest(variant: MusigVariant, message: bytes, params: CurveParams) -> bytes:
    if variant is MusigVariant.PEDERSEN:
        return pedersen_hash(message, params)
    if variant is MusigVariant.SHA256:
        return hashlib.sha256(message).digest()
    assert_never(variant)


def _challenge(variant: MusigVariant, r: bytes, public_key: bytes, digest: bytes) -> int:
    return hash_to_scalar(variant.domain, r, public_key, digest)


class PublicKey:
    """
    Signer public key: a prime-order curve point.

    Construction validates the point, so every instance is usable for
    verification.
    """

    def __init__(self, point: bytes):
        """
        Initialize from a 32-byte compressed point.

        Raises:
            MalformedEncodingError: If the length is wrong
            InvalidCurveElementError: If the bytes are not a valid point
        """
        self._point = decode_point(point, "public key")

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> PublicKey:
        """Create public key from bytes."""
        return cls(key_bytes)

    @classmethod
    def from_hex(cls, hex_string: str) -> PublicKey:
        """Create public key from hex string."""
        return cls(decode_hex(hex_string, POINT_SIZE, "PublicKey"))

    def to_bytes(self) -> bytes:
        """Get the 32-byte compressed point."""
        return self._point

    def to_hex(self) -> str:
        return self._point.hex()

    def verify(self, message: bytes, signature: Signature, variant: MusigVariant,
               params: Optional[CurveParams] = None) -> bool:
        """
        Check ``signature`` over ``message`` under this key.

        Never raises for an invalid signature; returns False instead.
        """
        params = params or get_curve_params()
        if signature.s == 0:
            return False
        try:
            digest = _message_digest(variant, message, params)
        except MalformedEncodingError as e:
            logger.debug(f"Rejecting {variant.value} signature: {e.message}")
            return False

        c = _challenge(variant, signature.r, self._point, digest)
        lhs = scalar_mult(signature.s, params.spending_key_generator)
        rhs = point_add(signature.r, scalar_mult(c, self._point))
        return lhs == rhs

    def verify_musig_pedersen(self, message: bytes, signature: Signature,
                              params: Optional[CurveParams] = None) -> bool:
        return self.verify(message, signature, MusigVariant.PEDERSEN, params)

    def verify_musig_sha256(self, message: bytes, signature: Signature,
                            params: Optional[CurveParams] = None) -> bool:
        return self.verify(message, signature, MusigVariant.SHA256, params)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self._point == other._point

    def __hash__(self) -> int:
        return hash(self._point)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"PublicKey.from_hex('{self.to_hex()}')"


class Signature:
    """Signature pair ``(R, s)``."""

    def __init__(self, r: bytes, s: int):
        """
        Args:
            r: 32-byte compressed point R
            s: scalar, must be below the group order

        Raises:
            InvalidCurveElementError: If R is not a valid point or s is out of range
        """
        self.r = decode_point(r, "R point")
        if not 0 <= s < CURVE_ORDER:
            raise InvalidCurveElementError("Failed to restore s scalar: not reduced modulo the group order")
        self.s = s

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """
        Decode ``R || s`` where s is little-endian.

        Raises:
            MalformedEncodingError: If the length is not 64 bytes
            InvalidCurveElementError: If R or s is illegal
        """
        if len(data) != SIGNATURE_SIZE:
            raise MalformedEncodingError(
                f"Signature size mismatch: expected {SIGNATURE_SIZE} bytes, got {len(data)}"
            )
        r_bar, s_bar = data[:POINT_SIZE], data[POINT_SIZE:]
        return cls(r_bar, decode_scalar(s_bar, "s scalar"))

    @classmethod
    def from_hex(cls, hex_string: str) -> Signature:
        return cls.from_bytes(decode_hex(hex_string, SIGNATURE_SIZE, "Signature"))

    def to_bytes(self) -> bytes:
        return self.r + encode_scalar(self.s)

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signature):
            return False
        return self.r == other.r and self.s == other.s

    def __hash__(self) -> int:
        return hash((self.r, self.s))

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Signature.from_hex('{self.to_hex()}')"


class PrivateKey:
    """
    Private spending key: a non-zero scalar.

    Signing is deterministic; the nonce is derived from the key, the
    challenge construction and the message.
    """

    def __init__(self, scalar: int):
        if not 0 < scalar < CURVE_ORDER:
            raise InvalidCurveElementError("Private key scalar must be in [1, L)")
        self._scalar = scalar

    @classmethod
    def generate(cls) -> PrivateKey:
        """Generate a new random private key."""
        return cls(random_scalar())

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> PrivateKey:
        """
        Derive a private key from an arbitrary seed.

        For deterministic test keys.
        """
        if isinstance(seed, str):
            seed = seed.encode('utf-8')
        scalar = hash_to_scalar(b"franklin_key_seed", seed)
        if scalar == 0:
            raise ValueError("Seed derives the zero scalar")
        return cls(scalar)

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> PrivateKey:
        """Create private key from its 32-byte little-endian scalar."""
        return cls(decode_scalar(key_bytes, "private key"))

    @classmethod
    def from_hex(cls, hex_string: str) -> PrivateKey:
        return cls.from_bytes(decode_hex(hex_string, SCALAR_SIZE, "PrivateKey"))

    def to_bytes(self) -> bytes:
        return encode_scalar(self._scalar)

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def public_key(self, params: Optional[CurveParams] = None) -> PublicKey:
        """Get the corresponding public key."""
        params = params or get_curve_params()
        return PublicKey(scalar_mult(self._scalar, params.spending_key_generator))

    def sign(self, message: bytes, variant: MusigVariant,
             params: Optional[CurveParams] = None) -> Signature:
        """
        Sign ``message`` with the given challenge construction.

        Raises:
            MalformedEncodingError: If the message exceeds the Pedersen capacity
        """
        params = params or get_curve_params()
        public_key = self.public_key(params).to_bytes()
        digest = _message_digest(variant, message, params)

        nonce = hash_to_scalar(b"musig_nonce", variant.domain, self.to_bytes(), message) or 1
        r = scalar_mult(nonce, params.spending_key_generator)
        c = _challenge(variant, r, public_key, digest)
        s = (nonce + c * self._scalar) % CURVE_ORDER
        return Signature(r, s)

    def sign_musig_pedersen(self, message: bytes, params: Optional[CurveParams] = None) -> Signature:
        return self.sign(message, MusigVariant.PEDERSEN, params)

    def sign_musig_sha256(self, message: bytes, params: Optional[CurveParams] = None) -> Signature:
        return self.sign(message, MusigVariant.SHA256, params)

    def __str__(self) -> str:
        return f"PrivateKey(public={self.public_key().to_hex()})"

    def __repr__(self) -> str:
        return self.__str__()


__all__ = [
    "MusigVariant",
    "PublicKey",
    "Signature",
    "PrivateKey",
    "SIGNATURE_SIZE",
]
