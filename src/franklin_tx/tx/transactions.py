"""
Franklin transactions and their canonical encoding.

Each variant serializes to a fixed byte layout that is both the signed
message and the hash preimage. The first byte is the variant's discriminant:

- Transfer: ``[5] from to token(u16) pack_token(amount) pack_fee(fee) nonce(u32)``
- Withdraw: ``[3] account eth_address token(u16) amount(u128) pack_fee(fee) nonce(u32)``
- Close:    ``[4] account nonce(u32)``

All integers are big-endian. The JSON transport tag (``"type"``) is a
separate string and never appears in the canonical bytes.
"""

from __future__ import annotations
import logging
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Literal, Optional, Union

from pydantic import BaseModel, Field, RootModel, model_validator
from typing_extensions import Annotated, assert_never

from ..codec.amounts import amount_to_u128, pack_fee, pack_token
from ..codec.hashes import sha256_bytes
from ..codec.writer import BinaryWriter
from ..crypto.params import CurveParams
from .account import ADDRESS_LEN, ETH_ADDRESS_LEN, AccountAddress, EthAddress
from .packed import TxSignature

logger = logging.getLogger(__name__)

TokenId = Annotated[int, Field(ge=0, le=0xFFFF)]
Nonce = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]

TRANSFER_TX_TYPE = 5
WITHDRAW_TX_TYPE = 3
CLOSE_TX_TYPE = 4


class TxType(str, Enum):
    """Wire-level tag of the JSON transport."""

    TRANSFER = "Transfer"
    WITHDRAW = "Withdraw"
    CLOSE = "Close"


def encode_transfer(from_: AccountAddress, to: AccountAddress, token: int,
                    amount: Decimal, fee: Decimal, nonce: int) -> bytes:
    """
    Canonical bytes of a transfer.

    Raises:
        AmountOutOfRangeError: If amount or fee cannot be packed
    """
    return (
        BinaryWriter()
        .u8(TRANSFER_TX_TYPE)
        .fixed_bytes(from_.data, ADDRESS_LEN)
        .fixed_bytes(to.data, ADDRESS_LEN)
        .u16be(token)
        .bytes(pack_token(amount))
        .bytes(pack_fee(fee))
        .u32be(nonce)
        .to_bytes()
    )


def encode_withdraw(account: AccountAddress, eth_address: EthAddress, token: int,
                    amount: Decimal, fee: Decimal, nonce: int) -> bytes:
    """
    Canonical bytes of a withdrawal.

    The amount is written as a full-width u128, not packed.

    Raises:
        AmountOutOfRangeError: If the amount is fractional, negative or too
            wide, or the fee cannot be packed
    """
    return (
        BinaryWriter()
        .u8(WITHDRAW_TX_TYPE)
        .fixed_bytes(account.data, ADDRESS_LEN)
        .fixed_bytes(eth_address.data, ETH_ADDRESS_LEN)
        .u16be(token)
        .u128be(amount_to_u128(amount))
        .bytes(pack_fee(fee))
        .u32be(nonce)
        .to_bytes()
    )


def encode_close(account: AccountAddress, nonce: int) -> bytes:
    """Canonical bytes of an account closure."""
    return (
        BinaryWriter()
        .u8(CLOSE_TX_TYPE)
        .fixed_bytes(account.data, ADDRESS_LEN)
        .u32be(nonce)
        .to_bytes()
    )


def _verify_owned(signature: TxSignature, message: bytes, owner: AccountAddress,
                  params: Optional[CurveParams]) -> bool:
    pub_key = signature.verify_musig_pedersen(message, params)
    if pub_key is None:
        return False
    if AccountAddress.from_pubkey(pub_key) != owner:
        logger.debug(f"Key {pub_key.to_hex()} does not own account {owner}")
        return False
    return True


class Transfer(BaseModel):
    """Move tokens between two accounts; signed by ``from``."""

    TX_TYPE: ClassVar[int] = TRANSFER_TX_TYPE

    type: Literal["Transfer"] = "Transfer"
    from_: AccountAddress = Field(..., alias="from")
    to: AccountAddress
    token: TokenId
    amount: Decimal
    fee: Decimal
    nonce: Nonce
    signature: TxSignature

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def _check_encodable(self) -> Transfer:
        self.get_bytes()
        return self

    def get_bytes(self) -> bytes:
        return encode_transfer(self.from_, self.to, self.token, self.amount, self.fee, self.nonce)

    def verify_signature(self, params: Optional[CurveParams] = None) -> bool:
        return _verify_owned(self.signature, self.get_bytes(), self.from_, params)


class Withdraw(BaseModel):
    """Move tokens from an account to an Ethereum address."""

    TX_TYPE: ClassVar[int] = WITHDRAW_TX_TYPE

    type: Literal["Withdraw"] = "Withdraw"
    account: AccountAddress
    eth_address: EthAddress
    token: TokenId
    # Always an explicit integer; there is no "withdraw everything" sentinel.
    amount: Decimal
    fee: Decimal
    nonce: Nonce
    signature: TxSignature

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def _check_encodable(self) -> Withdraw:
        self.get_bytes()
        return self

    def get_bytes(self) -> bytes:
        return encode_withdraw(self.account, self.eth_address, self.token,
                               self.amount, self.fee, self.nonce)

    def verify_signature(self, params: Optional[CurveParams] = None) -> bool:
        return _verify_owned(self.signature, self.get_bytes(), self.account, params)


class Close(BaseModel):
    """Close an account."""

    TX_TYPE: ClassVar[int] = CLOSE_TX_TYPE

    type: Literal["Close"] = "Close"
    account: AccountAddress
    nonce: Nonce
    signature: TxSignature

    model_config = {"frozen": True, "populate_by_name": True}

    def get_bytes(self) -> bytes:
        return encode_close(self.account, self.nonce)

    def verify_signature(self, params: Optional[CurveParams] = None) -> bool:
        return _verify_owned(self.signature, self.get_bytes(), self.account, params)


AnyTx = Annotated[Union[Transfer, Withdraw, Close], Field(discriminator="type")]


class FranklinTx(RootModel[AnyTx]):
    """
    Exactly one of Transfer, Withdraw or Close.

    JSON form is the variant object tagged with ``"type"``.
    """

    model_config = {"frozen": True}

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> FranklinTx:
        return cls.model_validate_json(data)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @property
    def tx(self) -> Union[Transfer, Withdraw, Close]:
        return self.root

    @property
    def tx_type(self) -> TxType:
        tx = self.root
        if isinstance(tx, Transfer):
            return TxType.TRANSFER
        if isinstance(tx, Withdraw):
            return TxType.WITHDRAW
        if isinstance(tx, Close):
            return TxType.CLOSE
        assert_never(tx)

    def hash(self) -> bytes:
        """32-byte SHA-256 of the canonical bytes."""
        return sha256_bytes(self.get_bytes())

    def account(self) -> AccountAddress:
        tx = self.root
        if isinstance(tx, Transfer):
            return tx.from_
        if isinstance(tx, Withdraw):
            return tx.account
        if isinstance(tx, Close):
            return tx.account
        assert_never(tx)

    def nonce(self) -> int:
        tx = self.root
        if isinstance(tx, Transfer):
            return tx.nonce
        if isinstance(tx, Withdraw):
            return tx.nonce
        if isinstance(tx, Close):
            return tx.nonce
        assert_never(tx)

    def check_signature(self, params: Optional[CurveParams] = None) -> bool:
        tx = self.root
        if isinstance(tx, Transfer):
            return tx.verify_signature(params)
        if isinstance(tx, Withdraw):
            return tx.verify_signature(params)
        if isinstance(tx, Close):
            return tx.verify_signature(params)
        assert_never(tx)

    def get_bytes(self) -> bytes:
        tx = self.root
        if isinstance(tx, Transfer):
            return tx.get_bytes()
        if isinstance(tx, Withdraw):
            return tx.get_bytes()
        if isinstance(tx, Close):
            return tx.get_bytes()
        assert_never(tx)


__all__ = [
    "TxType",
    "TokenId",
    "Nonce",
    "TRANSFER_TX_TYPE",
    "WITHDRAW_TX_TYPE",
    "CLOSE_TX_TYPE",
    "encode_transfer",
    "encode_withdraw",
    "encode_close",
    "Transfer",
    "Withdraw",
    "Close",
    "AnyTx",
    "FranklinTx",
]
