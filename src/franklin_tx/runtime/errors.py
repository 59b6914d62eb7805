"""
Franklin Error Model

This module provides the error handling framework for the transaction layer.
Construction-time failures (bad encodings, illegal curve elements, amounts
that cannot be packed) are raised as exceptions. An invalid signature is
never raised; verification reports it as ``False`` / ``None``.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Franklin error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    MALFORMED_ENCODING = 100
    INVALID_CURVE_ELEMENT = 101
    AMOUNT_OUT_OF_RANGE = 102

    # Network errors (200-299)
    NETWORK_ERROR = 200

    # Authentication errors (300-399)
    SIGNATURE_INVALID = 302


class FranklinError(Exception):
    """
    Base class for all Franklin errors.

    Not a ``ValueError`` subclass: raised inside a pydantic validator, these
    errors reach the caller of ``model_validate`` with their own type.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Franklin error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class MalformedEncodingError(FranklinError):
    """Wrong byte length or non-hex text for a packed value."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MALFORMED_ENCODING, details, cause)


class InvalidCurveElementError(FranklinError):
    """Correctly sized bytes that are not a legal point or scalar."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_CURVE_ELEMENT, details, cause)


class AmountOutOfRangeError(FranklinError):
    """Decimal amount that cannot be represented in its packed or fixed-width form."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.AMOUNT_OUT_OF_RANGE, details, cause)


class SpecTestAPIError(FranklinError):
    """Failure talking to the conformance debug server."""

    def __init__(self, message: str, status: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)
        self.status = status


def decode_hex(text: str, expected_len: int, what: str) -> bytes:
    """
    Decode hex text into exactly ``expected_len`` bytes.

    An optional ``0x`` prefix is accepted.

    Raises:
        MalformedEncodingError: On non-hex text or a length mismatch
    """
    if not isinstance(text, str):
        raise MalformedEncodingError(f"{what} must be a hex string, got {type(text).__name__}")
    body = text[2:] if text[:2] in ("0x", "0X") else text
    try:
        data = bytes.fromhex(body)
    except ValueError as e:
        raise MalformedEncodingError(f"Invalid hex string for {what}: {e}", cause=e)
    if len(data) != expected_len:
        raise MalformedEncodingError(
            f"{what} size mismatch: expected {expected_len} bytes, got {len(data)}",
            details={"expected": expected_len, "actual": len(data)},
        )
    return data


__all__ = [
    "ErrorCode",
    "FranklinError",
    "MalformedEncodingError",
    "InvalidCurveElementError",
    "AmountOutOfRangeError",
    "SpecTestAPIError",
    "decode_hex",
]
