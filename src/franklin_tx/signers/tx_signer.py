"""
Transaction signer.

Builds signed, immutable transactions owned by the signer's account: the
canonical bytes are produced from the plain fields, signed with the
musig-pedersen construction, and the signature is embedded in the model.
"""

from __future__ import annotations
import logging
from decimal import Decimal
from typing import Optional, Union

from ..crypto.eddsa import MusigVariant, PrivateKey, PublicKey
from ..crypto.params import CurveParams
from ..tx.account import AccountAddress, EthAddress
from ..tx.packed import PackedPublicKey, PackedSignature, TxSignature
from ..tx.transactions import (
    Close,
    Transfer,
    Withdraw,
    encode_close,
    encode_transfer,
    encode_withdraw,
)

logger = logging.getLogger(__name__)

AmountInput = Union[Decimal, int, str]


class TxSigner:
    """Signs transactions on behalf of one account."""

    def __init__(self, private_key: PrivateKey, params: Optional[CurveParams] = None):
        """
        Initialize signer.

        Args:
            private_key: Spending key of the account
            params: Curve parameters; the shared table when omitted
        """
        self.private_key = private_key
        self.params = params
        self.public_key: PublicKey = private_key.public_key(params)

    @classmethod
    def from_seed(cls, seed: Union[str, bytes], params: Optional[CurveParams] = None) -> TxSigner:
        return cls(PrivateKey.from_seed(seed), params)

    def address(self) -> AccountAddress:
        """Account owned by this signer."""
        return AccountAddress.from_pubkey(self.public_key)

    def sign_message(self, message: bytes,
                     variant: MusigVariant = MusigVariant.PEDERSEN) -> TxSignature:
        """
        Sign arbitrary bytes.

        Raises:
            MalformedEncodingError: If the message exceeds the Pedersen capacity
        """
        signature = self.private_key.sign(message, variant, self.params)
        tx_signature = TxSignature(
            pub_key=PackedPublicKey(self.public_key),
            sign=PackedSignature(signature),
        )
        logger.debug(f"Signed {len(message)} bytes ({variant.value}): {tx_signature}")
        return tx_signature

    def transfer(self, to: AccountAddress, token: int, amount: AmountInput,
                 fee: AmountInput, nonce: int) -> Transfer:
        """
        Build a signed transfer from this signer's account.

        Raises:
            AmountOutOfRangeError: If amount or fee cannot be packed
        """
        from_ = self.address()
        amount, fee = Decimal(amount), Decimal(fee)
        message = encode_transfer(from_, to, token, amount, fee, nonce)
        return Transfer(
            from_=from_,
            to=to,
            token=token,
            amount=amount,
            fee=fee,
            nonce=nonce,
            signature=self.sign_message(message),
        )

    def withdraw(self, eth_address: EthAddress, token: int, amount: AmountInput,
                 fee: AmountInput, nonce: int) -> Withdraw:
        """
        Build a signed withdrawal from this signer's account.

        Raises:
            AmountOutOfRangeError: If the amount is not a u128 integer or the
                fee cannot be packed
        """
        account = self.address()
        amount, fee = Decimal(amount), Decimal(fee)
        message = encode_withdraw(account, eth_address, token, amount, fee, nonce)
        return Withdraw(
            account=account,
            eth_address=eth_address,
            token=token,
            amount=amount,
            fee=fee,
            nonce=nonce,
            signature=self.sign_message(message),
        )

    def close(self, nonce: int) -> Close:
        """Build a signed closure of this signer's account."""
        account = self.address()
        message = encode_close(account, nonce)
        return Close(account=account, nonce=nonce, signature=self.sign_message(message))

    def __repr__(self) -> str:
        return f"TxSigner(address={self.address()})"


__all__ = ["TxSigner"]
