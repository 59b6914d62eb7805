"""
Transaction models: addresses, packed keys/signatures and the three
transaction variants.
"""

from .account import AccountAddress, EthAddress, ADDRESS_LEN, ETH_ADDRESS_LEN
from .packed import PackedPublicKey, PackedSignature, TxSignature
from .transactions import (
    AnyTx,
    Close,
    FranklinTx,
    Nonce,
    TokenId,
    Transfer,
    TxType,
    Withdraw,
    encode_close,
    encode_transfer,
    encode_withdraw,
    CLOSE_TX_TYPE,
    TRANSFER_TX_TYPE,
    WITHDRAW_TX_TYPE,
)

__all__ = [
    "AccountAddress",
    "EthAddress",
    "ADDRESS_LEN",
    "ETH_ADDRESS_LEN",
    "PackedPublicKey",
    "PackedSignature",
    "TxSignature",
    "AnyTx",
    "Close",
    "FranklinTx",
    "Nonce",
    "TokenId",
    "Transfer",
    "TxType",
    "Withdraw",
    "encode_close",
    "encode_transfer",
    "encode_withdraw",
    "CLOSE_TX_TYPE",
    "TRANSFER_TX_TYPE",
    "WITHDRAW_TX_TYPE",
]
