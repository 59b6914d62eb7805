"""
Debug-only conformance boundary: an HTTP server exposing address
derivation and signature checks, and a client for it.
"""

from .client import SpecTestClient
from .models import PubkeyPoint, ResultAddress, SignedMessage, SignedMessageKey, TxValidity

__all__ = [
    "SpecTestClient",
    "PubkeyPoint",
    "ResultAddress",
    "SignedMessage",
    "SignedMessageKey",
    "TxValidity",
]
