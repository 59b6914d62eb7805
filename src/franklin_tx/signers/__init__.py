"""
Signing infrastructure for Franklin transactions.
"""

from .tx_signer import TxSigner

__all__ = ["TxSigner"]
