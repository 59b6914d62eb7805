"""
Debug HTTP server for protocol conformance.

A FastAPI app exposing the address, signature and transaction checks so that
external test harnesses can exercise the codec over JSON.
"""

import argparse
import json
import logging
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from typing_extensions import assert_never

from ..crypto.eddsa import MusigVariant
from ..crypto.params import CurveParams, get_curve_params
from ..runtime.config import ServerConfig
from ..runtime.errors import FranklinError
from ..tx.account import AccountAddress
from ..tx.packed import PackedPublicKey
from ..tx.transactions import FranklinTx
from .models import (
    PubkeyPoint,
    ResultAddress,
    SignedMessage,
    SignedMessageKey,
    TxValidity,
)

logger = logging.getLogger("franklin_tx.spec_test")


def create_app(params: Optional[CurveParams] = None) -> FastAPI:
    """
    Build the debug application.

    The endpoints only invoke the core operations; they hold no state.
    """
    params = params or get_curve_params()
    app = FastAPI(
        title="Franklin spec-test server",
        description="Address derivation and signature checks for conformance testing",
        version="0.1.0",
    )

    @app.exception_handler(FranklinError)
    async def handle_franklin_error(request: Request, exc: FranklinError):
        logger.info(f"Rejected {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info(f"Rejected {request.url.path}: {exc.error_count()} validation errors")
        return JSONResponse(status_code=422, content={"detail": json.loads(exc.json(include_url=False))})

    @app.post("/address", response_model=ResultAddress)
    def address(req: PubkeyPoint) -> ResultAddress:
        return ResultAddress(address=AccountAddress.from_pubkey(req.pub_key.key))

    @app.post("/check_signature", response_model=SignedMessageKey)
    def check_signature(req: SignedMessage) -> SignedMessageKey:
        msg = req.message_bytes()
        if req.variant is MusigVariant.PEDERSEN:
            pk = req.signature.verify_musig_pedersen(msg, params)
        elif req.variant is MusigVariant.SHA256:
            pk = req.signature.verify_musig_sha256(msg, params)
        else:
            assert_never(req.variant)
        return SignedMessageKey(
            correct=pk is not None,
            pk=PackedPublicKey(pk) if pk is not None else None,
        )

    @app.post("/check_tx_signature", response_model=TxValidity)
    async def check_tx_signature(request: Request) -> TxValidity:
        tx = FranklinTx.from_json(await request.body())
        logger.info(f"tx: {tx.tx!r}")
        logger.info(f"tx bytes: {tx.get_bytes().hex()}")
        return TxValidity(valid=tx.check_signature(params))

    return app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    env = ServerConfig.from_env()
    parser = argparse.ArgumentParser(description="Franklin spec-test debug server")
    parser.add_argument("--host", default=env.host, help="bind address")
    parser.add_argument("--port", type=int, default=env.port, help="bind port")
    parser.add_argument("--log-level", default=env.log_level, help="logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = ServerConfig(host=args.host, port=args.port, log_level=args.log_level.upper())
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting spec-test server on {config.url}")
    uvicorn.run(create_app(), host=config.host, port=config.port,
                log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
