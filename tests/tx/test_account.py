"""
Account and Ethereum address types.
"""

import hashlib

import pytest
from pydantic import BaseModel

from franklin_tx.runtime.errors import MalformedEncodingError
from franklin_tx.tx.account import ADDRESS_LEN, AccountAddress, EthAddress


class _Holder(BaseModel):
    account: AccountAddress
    eth: EthAddress


class TestAccountAddress:
    """Address derivation and parsing."""

    def test_from_pubkey(self, alice):
        expected = hashlib.sha256(alice.public_key.to_bytes()).digest()[-ADDRESS_LEN:]
        address = AccountAddress.from_pubkey(alice.public_key)
        assert address.data == expected
        assert len(address.data) == 27

    def test_distinct_keys_distinct_addresses(self, alice, bob):
        assert alice.address() != bob.address()

    def test_hex_forms(self, alice):
        address = alice.address()
        text = address.to_hex()
        assert text.startswith("0x")
        assert AccountAddress.from_hex(text) == address
        assert AccountAddress.from_hex(text[2:]) == address
        assert str(address) == text
        assert "AccountAddress" in repr(address)

    def test_wrong_length(self):
        with pytest.raises(MalformedEncodingError):
            AccountAddress(b"\x00" * 26)
        with pytest.raises(MalformedEncodingError):
            AccountAddress.from_hex("00" * 28)

    def test_not_equal_to_other_types(self):
        assert AccountAddress(b"\x01" * 27) != b"\x01" * 27

    def test_hashable(self, alice):
        assert {alice.address(), alice.address()} == {alice.address()}


class TestPydanticIntegration:
    """Hex in, hex out."""

    def test_validate_from_hex_and_dump_json(self):
        holder = _Holder(account="0x" + "ab" * 27, eth="cd" * 20)
        assert holder.account == AccountAddress(b"\xab" * 27)
        assert holder.eth == EthAddress(b"\xcd" * 20)
        assert holder.model_dump(mode="json") == {
            "account": "0x" + "ab" * 27,
            "eth": "0x" + "cd" * 20,
        }

    def test_malformed_propagates_unwrapped(self):
        with pytest.raises(MalformedEncodingError):
            _Holder(account="ab" * 26, eth="cd" * 20)

    def test_eth_address_length(self):
        with pytest.raises(MalformedEncodingError):
            EthAddress(b"\x00" * 21)
