"""
Shared fixtures: deterministic signers and sample signed transactions.
"""

from decimal import Decimal

import pytest

from franklin_tx.crypto.params import get_curve_params
from franklin_tx.signers import TxSigner
from franklin_tx.tx import EthAddress


@pytest.fixture(scope="session")
def params():
    """Process-wide curve parameter table."""
    return get_curve_params()


@pytest.fixture(scope="session")
def alice():
    """Deterministic signer used as the sending account."""
    return TxSigner.from_seed(b"alice test seed")


@pytest.fixture(scope="session")
def bob():
    """Deterministic signer used as the receiving account."""
    return TxSigner.from_seed(b"bob test seed")


@pytest.fixture
def eth_address():
    return EthAddress(bytes(range(20)))


@pytest.fixture
def transfer(alice, bob):
    """Transfer{from=alice, to=bob, token=1, amount=1.5, fee=0.01, nonce=0}."""
    return alice.transfer(bob.address(), token=1, amount=Decimal("1.5"), fee=Decimal("0.01"), nonce=0)


@pytest.fixture
def withdraw(alice, eth_address):
    return alice.withdraw(eth_address, token=2, amount=Decimal("1000000"), fee=Decimal("25"), nonce=7)


@pytest.fixture
def close(alice):
    return alice.close(nonce=3)
