"""
Franklin transaction layer.

Canonical on-wire format and signature protocol for off-chain Transfer,
Withdraw and Close transactions: deterministic byte encoding, SHA-256
identifiers, and musig-style signature verification bound to the owning
account.
"""

from .runtime.errors import *
from .runtime.config import ServerConfig, ClientConfig
from .crypto import (
    CurveParams,
    MusigVariant,
    PrivateKey,
    PublicKey,
    Signature,
    get_curve_params,
    pedersen_hash,
)
from .codec import (
    amount_to_u128,
    closest_packable_fee,
    closest_packable_token,
    pack_fee,
    pack_token,
)
from .tx import *
from .signers import TxSigner

__version__ = "0.1.0"
