"""
Packed public keys and signatures.

Binary forms:

- PackedPublicKey: 32-byte compressed point
- PackedSignature: 32-byte compressed R followed by 32-byte little-endian s

Text form (JSON, logs, ``repr``) is always the lowercase hex of the binary
form, never the in-memory representation.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..crypto.curve import POINT_SIZE
from ..crypto.eddsa import SIGNATURE_SIZE, MusigVariant, PublicKey, Signature
from ..crypto.params import CurveParams
from ..runtime.errors import MalformedEncodingError, decode_hex

logger = logging.getLogger(__name__)


class _PackedValue(ABC):
    """Shared pydantic plumbing for hex-encoded packed values."""

    SIZE: int
    NAME: str

    @classmethod
    @abstractmethod
    def from_bytes(cls, data: bytes):
        """Decode from the packed binary form."""

    @abstractmethod
    def serialize_packed(self) -> bytes:
        """Packed binary form."""

    @classmethod
    def from_hex(cls, text: str):
        """
        Decode from hex text.

        Raises:
            MalformedEncodingError: Non-hex text or wrong length
            InvalidCurveElementError: Bytes that are not a legal curve element
        """
        return cls.from_bytes(decode_hex(text, cls.SIZE, cls.NAME))

    def to_hex(self) -> str:
        return self.serialize_packed().hex()

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.to_hex()}')"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_hex, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: CoreSchema, handler: GetJsonSchemaHandler
    ) -> Dict[str, Any]:
        return {"type": "string", "pattern": f"^[0-9a-f]{{{cls.SIZE * 2}}}$"}

    @classmethod
    def _validate(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(bytes(value))
        return cls._wrap(value)

    @classmethod
    def _wrap(cls, value: Any):
        raise MalformedEncodingError(f"Invalid {cls.NAME}: {type(value).__name__}")


class PackedPublicKey(_PackedValue):
    """Owns one ``PublicKey``; 32-byte packed form."""

    SIZE = POINT_SIZE
    NAME = "PublicKey"

    def __init__(self, key: PublicKey):
        self.key = key

    @classmethod
    def from_bytes(cls, data: bytes) -> PackedPublicKey:
        return cls(PublicKey(data))

    @classmethod
    def _wrap(cls, value: Any) -> PackedPublicKey:
        if isinstance(value, PublicKey):
            return cls(value)
        return super()._wrap(value)

    def serialize_packed(self) -> bytes:
        return self.key.to_bytes()

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, PackedPublicKey) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class PackedSignature(_PackedValue):
    """Owns one ``Signature``; 64-byte packed form."""

    SIZE = SIGNATURE_SIZE
    NAME = "Signature"

    def __init__(self, signature: Signature):
        self.signature = signature

    @classmethod
    def from_bytes(cls, data: bytes) -> PackedSignature:
        return cls(Signature.from_bytes(data))

    @classmethod
    def _wrap(cls, value: Any) -> PackedSignature:
        if isinstance(value, Signature):
            return cls(value)
        return super()._wrap(value)

    def serialize_packed(self) -> bytes:
        return self.signature.to_bytes()

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, PackedSignature) and self.signature == other.signature

    def __hash__(self) -> int:
        return hash(self.signature)


class TxSignature(BaseModel):
    """
    Public key plus signature carried by every transaction.

    Verification returns the signer's key on success and ``None`` on any
    failure; it never raises for an invalid signature.
    """

    pub_key: PackedPublicKey
    sign: PackedSignature

    model_config = {"frozen": True}

    def verify(self, message: bytes, variant: MusigVariant,
               params: Optional[CurveParams] = None) -> Optional[PublicKey]:
        key = self.pub_key.key
        if key.verify(message, self.sign.signature, variant, params):
            return key
        logger.debug(f"{variant.value} verification failed for {self}")
        return None

    def verify_musig_pedersen(self, message: bytes,
                              params: Optional[CurveParams] = None) -> Optional[PublicKey]:
        return self.verify(message, MusigVariant.PEDERSEN, params)

    def verify_musig_sha256(self, message: bytes,
                            params: Optional[CurveParams] = None) -> Optional[PublicKey]:
        return self.verify(message, MusigVariant.SHA256, params)

    def __repr__(self) -> str:
        return f"{{ pub_key: {self.pub_key.to_hex()}, sign: {self.sign.to_hex()} }}"

    def __str__(self) -> str:
        return self.__repr__()


__all__ = ["PackedPublicKey", "PackedSignature", "TxSignature"]
