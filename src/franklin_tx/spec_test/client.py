"""
HTTP client for the conformance debug server.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional, Union

import requests

from ..crypto.eddsa import MusigVariant, PublicKey
from ..runtime.config import ClientConfig
from ..runtime.errors import SpecTestAPIError
from ..tx.account import AccountAddress
from ..tx.packed import PackedPublicKey, TxSignature
from ..tx.transactions import AnyTx, FranklinTx
from .models import PubkeyPoint, ResultAddress, SignedMessage, SignedMessageKey, TxValidity


class SpecTestClient:
    """
    Client for the three debug endpoints.

    Requests are never retried; every call is a single POST.
    """

    def __init__(self, config: Union[str, ClientConfig, None] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Endpoint URL string or a ClientConfig object
            session: Optional pre-built session (shared pools, tests)
        """
        if config is None:
            self.config = ClientConfig()
        elif isinstance(config, str):
            self.config = ClientConfig(endpoint=config)
        else:
            self.config = config

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        self._session = session or requests.Session()

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        """
        POST a JSON body and return the decoded response.

        Raises:
            SpecTestAPIError: On network failures or non-2xx responses
        """
        url = f"{self.config.endpoint.rstrip('/')}{path}"
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }

        if self.config.debug:
            self.logger.debug(f"Request: {path} -> {json.dumps(payload)}")

        try:
            response = self._session.post(url, json=payload, headers=headers,
                                          timeout=self.config.timeout)
        except requests.RequestException as e:
            raise SpecTestAPIError(f"Network error: {e}", cause=e)

        if response.status_code >= 400:
            try:
                details = response.json()
            except ValueError:
                details = {"body": response.text}
            raise SpecTestAPIError(
                f"{path} failed with HTTP {response.status_code}",
                status=response.status_code,
                details=details,
            )

        result = response.json()
        if self.config.debug:
            self.logger.debug(f"Response: {json.dumps(result)}")
        return result

    def address(self, pub_key: Union[PublicKey, PackedPublicKey, str]) -> AccountAddress:
        """Ask the server for the address owned by ``pub_key``."""
        body = PubkeyPoint(pub_key=pub_key).model_dump(mode="json")
        return ResultAddress.model_validate(self._post("/address", body)).address

    def check_signature(self, message: bytes, signature: TxSignature,
                        variant: MusigVariant = MusigVariant.PEDERSEN) -> Optional[PublicKey]:
        """Verify ``signature`` over ``message`` remotely; returns the signer key or None."""
        body = SignedMessage.from_bytes(message, signature, variant).model_dump(mode="json")
        result = SignedMessageKey.model_validate(self._post("/check_signature", body))
        if not result.correct or result.pk is None:
            return None
        return result.pk.key

    def check_tx_signature(self, tx: Union[FranklinTx, AnyTx]) -> bool:
        """Verify a full transaction remotely."""
        if not isinstance(tx, FranklinTx):
            tx = FranklinTx(tx)
        body = tx.model_dump(mode="json", by_alias=True)
        return TxValidity.model_validate(self._post("/check_tx_signature", body)).valid

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SpecTestClient:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = ["SpecTestClient"]
