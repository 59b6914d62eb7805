"""
Spec-test HTTP client tests.

Unit tests use a mocked session; the integration class routes the client
through FastAPI's TestClient so both sides of the wire are exercised.
"""

from unittest.mock import Mock

import pytest
import requests
from fastapi.testclient import TestClient

from franklin_tx.crypto.eddsa import MusigVariant
from franklin_tx.runtime.config import ClientConfig
from franklin_tx.runtime.errors import SpecTestAPIError
from franklin_tx.spec_test import SpecTestClient
from franklin_tx.spec_test.server import create_app
from franklin_tx.tx import FranklinTx


def _response(status_code, payload):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


class TestSpecTestClientUnit:
    """Request shaping and error mapping."""

    def test_config_from_string(self):
        client = SpecTestClient("http://example:1", session=Mock())
        assert client.config.endpoint == "http://example:1"

    def test_address_request(self, alice):
        session = Mock()
        session.post.return_value = _response(200, {"address": alice.address().to_hex()})
        client = SpecTestClient(ClientConfig(endpoint="http://server/"), session=session)

        assert client.address(alice.public_key) == alice.address()
        args, kwargs = session.post.call_args
        assert args[0] == "http://server/address"
        assert kwargs["json"] == {"pub_key": alice.public_key.to_hex()}
        assert kwargs["timeout"] == 10.0

    def test_http_error(self, alice):
        session = Mock()
        session.post.return_value = _response(400, {"code": 100, "message": "bad"})
        client = SpecTestClient(session=session)
        with pytest.raises(SpecTestAPIError) as exc_info:
            client.address(alice.public_key)
        assert exc_info.value.status == 400
        assert exc_info.value.details == {"code": 100, "message": "bad"}

    def test_network_error(self, alice):
        session = Mock()
        session.post.side_effect = requests.ConnectionError("refused")
        client = SpecTestClient(session=session)
        with pytest.raises(SpecTestAPIError) as exc_info:
            client.address(alice.public_key)
        assert "Network error" in exc_info.value.message
        assert isinstance(exc_info.value.cause, requests.ConnectionError)

    def test_incorrect_signature_returns_none(self, alice):
        session = Mock()
        session.post.return_value = _response(200, {"correct": False, "pk": None})
        client = SpecTestClient(session=session)
        assert client.check_signature(b"m", alice.sign_message(b"m")) is None

    def test_context_manager_closes_session(self):
        session = Mock()
        with SpecTestClient(session=session):
            pass
        session.close.assert_called_once()


class TestSpecTestClientIntegration:
    """Client against the real application."""

    @pytest.fixture(scope="class")
    def client(self):
        return SpecTestClient("http://testserver", session=TestClient(create_app()))

    def test_address(self, client, bob):
        assert client.address(bob.public_key) == bob.address()

    def test_check_signature(self, client, alice):
        signature = alice.sign_message(b"abc", MusigVariant.SHA256)
        assert client.check_signature(b"abc", signature, MusigVariant.SHA256) == alice.public_key
        assert client.check_signature(b"abd", signature, MusigVariant.SHA256) is None

    def test_check_tx_signature(self, client, transfer, close):
        assert client.check_tx_signature(transfer) is True
        assert client.check_tx_signature(FranklinTx(close)) is True
        assert client.check_tx_signature(transfer.model_copy(update={"nonce": 99})) is False

    def test_server_rejection_surfaces(self, client):
        with pytest.raises(SpecTestAPIError) as exc_info:
            client._post("/address", {"pub_key": "ab" * 31})
        assert exc_info.value.status == 400
        assert exc_info.value.details["code"] == 100
