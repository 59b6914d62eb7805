"""
Transaction encoding, hashing and signature checks.

Covers the canonical byte layout of each variant, determinism, hash
separation, tamper detection, account ownership binding and the tagged JSON
transport of ``FranklinTx``.
"""

import hashlib
import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from franklin_tx.codec.amounts import pack_fee, pack_token
from franklin_tx.runtime.errors import AmountOutOfRangeError, MalformedEncodingError
from franklin_tx.tx import (
    AccountAddress,
    Close,
    EthAddress,
    FranklinTx,
    Transfer,
    TxType,
    Withdraw,
    encode_transfer,
)


class TestCanonicalBytes:
    """Byte layout of each variant."""

    def test_transfer_layout(self, transfer, alice, bob):
        data = transfer.get_bytes()
        assert len(data) == 1 + 27 + 27 + 2 + 5 + 2 + 4
        assert data[0] == 5
        assert data[1:28] == alice.address().data
        assert data[28:55] == bob.address().data
        assert data[55:57] == b"\x00\x01"
        assert data[57:62] == pack_token(Decimal("1.5"))
        assert data[62:64] == pack_fee(Decimal("0.01"))
        assert data[64:68] == b"\x00\x00\x00\x00"

    def test_withdraw_layout(self, withdraw, alice, eth_address):
        data = withdraw.get_bytes()
        assert len(data) == 1 + 27 + 20 + 2 + 16 + 2 + 4
        assert data[0] == 3
        assert data[1:28] == alice.address().data
        assert data[28:48] == eth_address.data
        assert data[48:50] == b"\x00\x02"
        assert int.from_bytes(data[50:66], "big") == 1_000_000
        assert data[66:68] == pack_fee(Decimal(25))
        assert data[68:72] == b"\x00\x00\x00\x07"

    def test_close_layout(self, close, alice):
        data = close.get_bytes()
        assert data == b"\x04" + alice.address().data + b"\x00\x00\x00\x03"

    def test_deterministic(self, transfer):
        assert transfer.get_bytes() == transfer.get_bytes()
        assert FranklinTx(transfer).hash() == FranklinTx(transfer).hash()

    def test_discriminant_is_first_byte(self, transfer, withdraw, close):
        assert transfer.get_bytes()[0] == Transfer.TX_TYPE == 5
        assert withdraw.get_bytes()[0] == Withdraw.TX_TYPE == 3
        assert close.get_bytes()[0] == Close.TX_TYPE == 4

    def test_json_tag_not_in_bytes(self, close):
        assert b"Close" not in close.get_bytes()


class TestHash:
    """Transaction identifiers."""

    def test_hash_is_sha256_of_bytes(self, transfer):
        tx = FranklinTx(transfer)
        assert tx.hash() == hashlib.sha256(transfer.get_bytes()).digest()
        assert len(tx.hash()) == 32

    def test_withdraw_hash_depends_on_eth_address(self, alice):
        """Two withdrawals differing only in eth_address hash differently."""
        first = alice.withdraw(EthAddress(b"\x01" * 20), token=0, amount=500, fee=1, nonce=1)
        second = alice.withdraw(EthAddress(b"\x02" * 20), token=0, amount=500, fee=1, nonce=1)
        assert FranklinTx(first).hash() != FranklinTx(second).hash()

    def test_variants_do_not_collide(self, transfer, withdraw, close):
        hashes = {FranklinTx(tx).hash() for tx in (transfer, withdraw, close)}
        assert len(hashes) == 3


class TestSignatureCheck:
    """Validity requires a correct signature from the owning account."""

    def test_signed_transfer_is_valid(self, transfer):
        assert transfer.verify_signature()
        assert FranklinTx(transfer).check_signature()

    def test_changed_nonce_invalidates(self, transfer):
        tampered = transfer.model_copy(update={"nonce": 1})
        assert not tampered.verify_signature()
        assert not FranklinTx(tampered).check_signature()

    @pytest.mark.parametrize("update", [
        {"amount": Decimal(2000)},
        {"amount": Decimal("1.9")},
        {"fee": Decimal(5)},
        {"fee": Decimal("0.99")},
        {"fee": Decimal(0)},
        {"token": 2},
    ])
    def test_changed_field_invalidates(self, transfer, update):
        assert not transfer.model_copy(update=update).verify_signature()

    def test_changed_fractional_amount_and_fee_invalidates(self, transfer):
        tampered = transfer.model_copy(update={"amount": Decimal("1.9"), "fee": Decimal("0.99")})
        assert tampered.get_bytes() != transfer.get_bytes()
        assert not tampered.verify_signature()

    def test_changed_recipient_invalidates(self, transfer, alice):
        assert not transfer.model_copy(update={"to": alice.address()}).verify_signature()

    def test_withdraw_and_close_valid(self, withdraw, close):
        assert FranklinTx(withdraw).check_signature()
        assert FranklinTx(close).check_signature()

    def test_changed_eth_address_invalidates(self, withdraw):
        tampered = withdraw.model_copy(update={"eth_address": EthAddress(b"\xee" * 20)})
        assert not tampered.verify_signature()

    def test_signature_from_non_owner(self, alice, bob):
        """A correct signature by a key that does not own ``from`` is rejected."""
        message = encode_transfer(bob.address(), alice.address(), 1, Decimal(10), Decimal(1), 0)
        signature = alice.sign_message(message)
        assert signature.verify_musig_pedersen(message) == alice.public_key
        forged = Transfer(
            from_=bob.address(),
            to=alice.address(),
            token=1,
            amount=Decimal(10),
            fee=Decimal(1),
            nonce=0,
            signature=signature,
        )
        assert not forged.verify_signature()

    def test_signature_swapped_between_transactions(self, transfer, close):
        swapped = close.model_copy(update={"signature": transfer.signature})
        assert not swapped.verify_signature()


class TestConstruction:
    """Field validation at construction time."""

    def test_frozen(self, transfer):
        with pytest.raises(ValidationError):
            transfer.nonce = 5

    def test_token_out_of_range(self, transfer):
        data = transfer.model_dump(by_alias=True)
        data["token"] = 0x10000
        with pytest.raises(ValidationError):
            Transfer.model_validate(data)

    def test_nonce_out_of_range(self, close):
        data = close.model_dump()
        data["nonce"] = 1 << 32
        with pytest.raises(ValidationError):
            Close.model_validate(data)

    def test_unpackable_amount(self, transfer):
        data = transfer.model_dump(by_alias=True)
        data["amount"] = Decimal(2 ** 35) * Decimal(10) ** 32
        with pytest.raises(AmountOutOfRangeError):
            Transfer.model_validate(data)

    def test_fractional_withdraw_amount(self, withdraw):
        data = withdraw.model_dump()
        data["amount"] = Decimal("1.5")
        with pytest.raises(AmountOutOfRangeError):
            Withdraw.model_validate(data)

    def test_signer_rejects_fractional_withdraw(self, alice, eth_address):
        with pytest.raises(AmountOutOfRangeError):
            alice.withdraw(eth_address, token=0, amount="0.5", fee=0, nonce=0)


class TestFranklinTx:
    """Closed dispatcher over the three variants."""

    def test_accessors(self, transfer, withdraw, close, alice):
        for tx, tx_type, nonce in (
            (transfer, TxType.TRANSFER, 0),
            (withdraw, TxType.WITHDRAW, 7),
            (close, TxType.CLOSE, 3),
        ):
            wrapped = FranklinTx(tx)
            assert wrapped.tx == tx
            assert wrapped.tx_type is tx_type
            assert wrapped.account() == alice.address()
            assert wrapped.nonce() == nonce
            assert wrapped.get_bytes() == tx.get_bytes()

    def test_json_shape(self, transfer, alice):
        data = json.loads(FranklinTx(transfer).to_json())
        assert data["type"] == "Transfer"
        assert data["from"] == alice.address().to_hex()
        assert "from_" not in data
        assert data["signature"]["pub_key"] == alice.public_key.to_hex()

    @pytest.mark.parametrize("name", ["transfer", "withdraw", "close"])
    def test_json_round_trip(self, request, name):
        tx = FranklinTx(request.getfixturevalue(name))
        restored = FranklinTx.from_json(tx.to_json())
        assert restored.tx_type is tx.tx_type
        assert restored.get_bytes() == tx.get_bytes()
        assert restored.check_signature()

    def test_unknown_tag(self, close):
        data = json.loads(FranklinTx(close).to_json())
        data["type"] = "Deposit"
        with pytest.raises(ValidationError):
            FranklinTx.from_json(json.dumps(data))

    def test_mismatched_tag(self, close):
        data = json.loads(FranklinTx(close).to_json())
        data["type"] = "Transfer"
        with pytest.raises(ValidationError):
            FranklinTx.from_json(json.dumps(data))

    def test_malformed_address_in_json(self, close):
        data = json.loads(FranklinTx(close).to_json())
        data["account"] = "0x" + "00" * 26
        with pytest.raises(MalformedEncodingError):
            FranklinTx.from_json(json.dumps(data))

    def test_transport_populates_by_alias(self, transfer):
        data = json.loads(FranklinTx(transfer).to_json())
        restored = FranklinTx.model_validate(data)
        assert isinstance(restored.tx, Transfer)
        assert restored.tx.from_ == AccountAddress.from_hex(data["from"])
