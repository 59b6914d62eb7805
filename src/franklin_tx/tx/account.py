"""
Fixed-width address types usable as pydantic fields.

``AccountAddress`` is the one-way compression of a public key that names a
ledger account. ``EthAddress`` is the 20-byte L1 destination of a withdrawal.
Both are compared by raw bytes and render as ``0x``-prefixed lowercase hex.
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..codec.hashes import sha256_bytes
from ..crypto.eddsa import PublicKey
from ..runtime.errors import MalformedEncodingError, decode_hex

ADDRESS_LEN = 27
ETH_ADDRESS_LEN = 20


class _FixedBytes:
    """Immutable byte string of a fixed length."""

    LENGTH: ClassVar[int]
    NAME: ClassVar[str]

    __slots__ = ("_data",)

    def __init__(self, data: bytes):
        if not isinstance(data, (bytes, bytearray)):
            raise MalformedEncodingError(f"{self.NAME} must be bytes, got {type(data).__name__}")
        if len(data) != self.LENGTH:
            raise MalformedEncodingError(
                f"{self.NAME} size mismatch: expected {self.LENGTH} bytes, got {len(data)}"
            )
        self._data = bytes(data)

    @classmethod
    def from_hex(cls, text: str):
        """Parse hex text, with or without a ``0x`` prefix."""
        return cls(decode_hex(text, cls.LENGTH, cls.NAME))

    @property
    def data(self) -> bytes:
        return self._data

    def to_hex(self) -> str:
        return "0x" + self._data.hex()

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: Any) -> bool:
        if type(other) is type(self):
            return self._data == other._data
        return False

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))

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
        """Validate from hex text or raw bytes; serialize to hex in JSON mode."""
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
        return {"type": "string", "pattern": f"^(0x)?[0-9a-fA-F]{{{cls.LENGTH * 2}}}$"}

    @classmethod
    def _validate(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (bytes, bytearray)):
            return cls(value)
        raise MalformedEncodingError(f"Invalid {cls.NAME}: {value!r}")


class AccountAddress(_FixedBytes):
    """27-byte ledger account address."""

    LENGTH = ADDRESS_LEN
    NAME = "AccountAddress"

    __slots__ = ()

    @classmethod
    def from_pubkey(cls, public_key: PublicKey) -> AccountAddress:
        """
        Derive the account address owned by ``public_key``.

        The trailing 27 bytes of SHA-256 over the packed point.
        """
        return cls(sha256_bytes(public_key.to_bytes())[-ADDRESS_LEN:])


class EthAddress(_FixedBytes):
    """20-byte Ethereum address."""

    LENGTH = ETH_ADDRESS_LEN
    NAME = "EthAddress"

    __slots__ = ()


__all__ = ["AccountAddress", "EthAddress", "ADDRESS_LEN", "ETH_ADDRESS_LEN"]
