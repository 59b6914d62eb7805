"""
Request and response bodies of the conformance endpoints.
"""

from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field
from typing_extensions import Annotated

from ..crypto.eddsa import MusigVariant
from ..tx.account import AccountAddress
from ..tx.packed import PackedPublicKey, TxSignature

Byte = Annotated[int, Field(ge=0, le=255)]


class PubkeyPoint(BaseModel):
    """Body of ``POST /address``."""
    pub_key: PackedPublicKey


class ResultAddress(BaseModel):
    address: AccountAddress


class SignedMessage(BaseModel):
    """Body of ``POST /check_signature``; ``msg`` is a JSON array of bytes."""
    msg: List[Byte]
    signature: TxSignature
    variant: MusigVariant

    @classmethod
    def from_bytes(cls, message: bytes, signature: TxSignature,
                   variant: MusigVariant) -> SignedMessage:
        return cls(msg=list(message), signature=signature, variant=variant)

    def message_bytes(self) -> bytes:
        return bytes(self.msg)


class SignedMessageKey(BaseModel):
    correct: bool
    pk: Optional[PackedPublicKey] = None


class TxValidity(BaseModel):
    valid: bool


__all__ = [
    "PubkeyPoint",
    "ResultAddress",
    "SignedMessage",
    "SignedMessageKey",
    "TxValidity",
]
