"""Fixed-point conversions between decimal strings and integer base units."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

USDC_DECIMALS = 6
TOKEN_DECIMALS = 18

AmountLike = Union[str, int, float, Decimal]

_NON_NUMERIC = re.compile(r"[^0-9.]")
_PRECISION = 80


class InvalidAmount(ValueError):
    """Raised when a value cannot be read as a non-negative decimal amount."""


def parse_decimal(amount: AmountLike) -> Decimal:
    """Read a human amount such as "$10,000.50" into a Decimal.

    Strings are stripped of every character except digits and the decimal
    point before parsing, so currency symbols, separators and unit words are
    tolerated. Numbers are accepted as-is but must be finite and non-negative.
    """

    if isinstance(amount, bool):
        raise InvalidAmount("Amount must be numeric.")

    if isinstance(amount, (int, float, Decimal)):
        try:
            value = Decimal(str(amount))
        except InvalidOperation as exc:
            raise InvalidAmount(f"Amount is not numeric: {amount!r}") from exc
        if not value.is_finite():
            raise InvalidAmount("Amount must be finite.")
        if value < 0:
            raise InvalidAmount("Amount must be non-negative.")
        return value

    if not isinstance(amount, str):
        raise InvalidAmount("Amount must be a string or a number.")

    stripped = _NON_NUMERIC.sub("", amount)
    if not stripped or stripped == "." or stripped.count(".") > 1:
        raise InvalidAmount(f"Amount is not numeric: {amount!r}")
    try:
        return Decimal(stripped)
    except InvalidOperation as exc:
        raise InvalidAmount(f"Amount is not numeric: {amount!r}") from exc


def to_base_units(amount: AmountLike, decimals: int) -> int:
    """Scale a decimal amount to integer base units, rounding half up."""

    _validate_decimals(decimals)
    value = parse_decimal(amount)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        try:
            scaled = (value * (Decimal(10) ** decimals)).quantize(
                Decimal(1), rounding=ROUND_HALF_UP
            )
        except InvalidOperation as exc:
            raise InvalidAmount(f"Amount is too large: {amount!r}") from exc
    return int(scaled)


def from_base_units(value: int, decimals: int) -> str:
    """Render base units as a plain decimal string without trailing zeros."""

    _validate_decimals(decimals)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount("Base-unit amounts must be integers.")

    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10 ** decimals)
    if decimals == 0:
        return f"{sign}{whole}"
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    if not fraction_text:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{fraction_text}"


def parse_usdc(amount: AmountLike) -> int:
    return to_base_units(amount, USDC_DECIMALS)


def parse_token(amount: AmountLike) -> int:
    return to_base_units(amount, TOKEN_DECIMALS)


def format_usdc(value: int) -> str:
    """Currency display for USDC base units, e.g. ``$10,000.00``."""

    quantized = _display_decimal(value, USDC_DECIMALS, places=2)
    if quantized < 0:
        return f"-${abs(quantized):,.2f}"
    return f"${quantized:,.2f}"


def format_token(value: int, symbol: Optional[str] = None, places: int = 4) -> str:
    """Display for 18-decimal token base units."""

    quantized = _display_decimal(value, TOKEN_DECIMALS, places=places)
    text = f"{quantized:,.{places}f}"
    return f"{text} {symbol}" if symbol else text


def _display_decimal(value: int, decimals: int, places: int) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount("Base-unit amounts must be integers.")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = Decimal(value) / (Decimal(10) ** decimals)
        return scaled.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _validate_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError("decimals must be a non-negative integer.")
