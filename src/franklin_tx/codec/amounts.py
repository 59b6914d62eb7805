"""
Decimal amount packing.

Fees and token amounts are signed in a compact decimal floating-point form,
``value = mantissa * 10 ** (exponent - bias)``, stored as ``(mantissa <<
exponent_bits) | exponent`` in big-endian bytes. The bias makes the smallest
step ``10 ** -18``. Packing truncates toward zero: digits are dropped while the
mantissa does not fit its width. Values that need a larger exponent than the
format allows, that are negative or not finite, or that are non-zero but
smaller than one step raise ``AmountOutOfRangeError``.

Withdrawal amounts are not packed; they are encoded as a full-width u128.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from ..runtime.errors import AmountOutOfRangeError, MalformedEncodingError

AmountLike = Union[Decimal, int, str]

U128_MAX = (1 << 128) - 1

# Decimal places below the unit that packed amounts can express.
AMOUNT_DECIMALS = 18


@dataclass(frozen=True)
class PackedFloatFormat:
    """Bit layout of a packed decimal amount."""

    name: str
    exponent_bits: int
    mantissa_bits: int
    exponent_bias: int = AMOUNT_DECIMALS
    base: int = 10

    @property
    def width(self) -> int:
        """Packed size in bytes."""
        return (self.exponent_bits + self.mantissa_bits) // 8

    @property
    def max_exponent(self) -> int:
        return (1 << self.exponent_bits) - 1

    @property
    def max_mantissa(self) -> int:
        return (1 << self.mantissa_bits) - 1

    @property
    def min_step(self) -> Decimal:
        """Smallest non-zero packable value."""
        return Decimal(1).scaleb(-self.exponent_bias)

    @property
    def max_value(self) -> Decimal:
        return Decimal(self.max_mantissa).scaleb(self.max_exponent - self.exponent_bias)


FEE_FORMAT = PackedFloatFormat("fee", exponent_bits=5, mantissa_bits=11)
TOKEN_FORMAT = PackedFloatFormat("token", exponent_bits=5, mantissa_bits=35)


def _as_decimal(amount: AmountLike) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, (int, str)) and not isinstance(amount, bool):
        try:
            return Decimal(amount)
        except ArithmeticError as e:
            raise AmountOutOfRangeError(f"Not a decimal amount: {amount!r}", cause=e)
    raise AmountOutOfRangeError(f"Unsupported amount type: {type(amount).__name__}")


def _to_steps(value: Decimal, fmt: PackedFloatFormat) -> int:
    """``value`` in units of ``fmt.min_step``, truncated toward zero."""
    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)) or "0")
    shift = exponent + fmt.exponent_bias
    if shift >= 0:
        return coefficient * fmt.base ** shift
    return coefficient // fmt.base ** -shift


def pack_amount(amount: AmountLike, fmt: PackedFloatFormat) -> bytes:
    """
    Pack a decimal into ``fmt``.

    Raises:
        AmountOutOfRangeError: If the amount is negative, not finite, larger
            than the format can express, or non-zero but below one step
    """
    value = _as_decimal(amount)
    what = f"{fmt.name} amount"
    if not value.is_finite():
        raise AmountOutOfRangeError(f"{what} must be finite, got {value}")
    if value < 0:
        raise AmountOutOfRangeError(f"{what} must not be negative, got {value}")

    mantissa = _to_steps(value, fmt)
    if mantissa == 0 and value != 0:
        raise AmountOutOfRangeError(
            f"{what} {value} is below the smallest packable step {fmt.min_step}",
            details={"format": fmt.name, "amount": str(value)},
        )
    exponent = 0
    while mantissa > fmt.max_mantissa:
        mantissa //= fmt.base
        exponent += 1
    if exponent > fmt.max_exponent:
        raise AmountOutOfRangeError(
            f"{what} {value} exceeds packable range (max {fmt.max_value})",
            details={"format": fmt.name, "amount": str(value)},
        )
    packed = (mantissa << fmt.exponent_bits) | exponent
    return packed.to_bytes(fmt.width, "big")


def unpack_amount(data: bytes, fmt: PackedFloatFormat) -> Decimal:
    """Inverse of ``pack_amount`` for already-packed bytes."""
    if len(data) != fmt.width:
        raise MalformedEncodingError(
            f"Packed {fmt.name} amount must be {fmt.width} bytes, got {len(data)}"
        )
    raw = int.from_bytes(data, "big")
    exponent = raw & fmt.max_exponent
    mantissa = raw >> fmt.exponent_bits
    return Decimal(mantissa).scaleb(exponent - fmt.exponent_bias)


def pack_fee(amount: AmountLike) -> bytes:
    """Pack a fee into 2 bytes."""
    return pack_amount(amount, FEE_FORMAT)


def pack_token(amount: AmountLike) -> bytes:
    """Pack a token amount into 5 bytes."""
    return pack_amount(amount, TOKEN_FORMAT)


def unpack_fee(data: bytes) -> Decimal:
    return unpack_amount(data, FEE_FORMAT)


def unpack_token(data: bytes) -> Decimal:
    return unpack_amount(data, TOKEN_FORMAT)


def closest_packable_fee(amount: AmountLike) -> Decimal:
    """Largest packable fee not above ``amount``."""
    return unpack_fee(pack_fee(amount))


def closest_packable_token(amount: AmountLike) -> Decimal:
    """Largest packable token amount not above ``amount``."""
    return unpack_token(pack_token(amount))


def is_fee_packable(amount: AmountLike) -> bool:
    """True if ``amount`` packs as a fee without loss."""
    try:
        return closest_packable_fee(amount) == _as_decimal(amount)
    except AmountOutOfRangeError:
        return False


def is_token_packable(amount: AmountLike) -> bool:
    """True if ``amount`` packs as a token amount without loss."""
    try:
        return closest_packable_token(amount) == _as_decimal(amount)
    except AmountOutOfRangeError:
        return False


def amount_to_u128(amount: AmountLike) -> int:
    """
    Convert a withdrawal amount to an unsigned 128-bit integer.

    Raises:
        AmountOutOfRangeError: If the amount has a fractional part, is
            negative, or needs more than 128 bits
    """
    value = _as_decimal(amount)
    if not value.is_finite():
        raise AmountOutOfRangeError(f"Withdraw amount must be finite, got {value}")
    if value != value.to_integral_value():
        raise AmountOutOfRangeError(f"Withdraw amount must be an integer, got {value}")
    integer = int(value)
    if integer < 0 or integer > U128_MAX:
        raise AmountOutOfRangeError(
            f"Withdraw amount {value} does not fit in u128",
            details={"amount": str(value)},
        )
    return integer


__all__ = [
    "PackedFloatFormat",
    "FEE_FORMAT",
    "TOKEN_FORMAT",
    "U128_MAX",
    "AMOUNT_DECIMALS",
    "pack_amount",
    "unpack_amount",
    "pack_fee",
    "pack_token",
    "unpack_fee",
    "unpack_token",
    "closest_packable_fee",
    "closest_packable_token",
    "is_fee_packable",
    "is_token_packable",
    "amount_to_u128",
]
