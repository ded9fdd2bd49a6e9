"""Square-root price encoding and slippage bounds for concentrated-liquidity pools."""

from decimal import ROUND_FLOOR, Decimal, InvalidOperation, localcontext
from typing import Union

from .amounts import InvalidAmount

Q96 = 2 ** 96

# Bounds of the sqrtPriceX96 domain accepted by the pool manager.
MIN_SQRT_PRICE = 4295128739
MAX_SQRT_PRICE = 1461446703485210103287273052203988822378723970342

BPS_DENOMINATOR = 10_000
DEFAULT_SLIPPAGE_BPS = 50

PriceLike = Union[str, int, float, Decimal]


def price_to_sqrt_price_x96(price: PriceLike) -> int:
    """Encode a price (token1 per token0) as ``floor(sqrt(price) * 2**96)``."""

    value = _price_decimal(price)
    with localcontext() as ctx:
        ctx.prec = 80
        encoded = int((value.sqrt() * Q96).to_integral_value(rounding=ROUND_FLOOR))
    if encoded < MIN_SQRT_PRICE or encoded >= MAX_SQRT_PRICE:
        raise InvalidAmount("Price is outside the range a pool can represent.")
    return encoded


def sqrt_price_x96_to_price(sqrt_price_x96: int) -> float:
    """Decode ``(sqrtPriceX96 / 2**96) ** 2`` back to a float price."""

    if isinstance(sqrt_price_x96, bool) or not isinstance(sqrt_price_x96, int):
        raise InvalidAmount("sqrtPriceX96 must be an integer.")
    if sqrt_price_x96 <= 0:
        raise InvalidAmount("sqrtPriceX96 must be positive.")
    with localcontext() as ctx:
        ctx.prec = 80
        ratio = Decimal(sqrt_price_x96) / Decimal(Q96)
        return float(ratio * ratio)


def calculate_min_output(expected_output: int, slippage_bps: int = DEFAULT_SLIPPAGE_BPS) -> int:
    """Lower bound on output after slippage; truncates toward zero."""

    if isinstance(expected_output, bool) or not isinstance(expected_output, int):
        raise InvalidAmount("Expected output must be an integer amount of base units.")
    if expected_output < 0:
        raise InvalidAmount("Expected output must be non-negative.")
    if isinstance(slippage_bps, bool) or not isinstance(slippage_bps, int):
        raise InvalidAmount("Slippage must be an integer number of basis points.")
    if not 0 <= slippage_bps <= BPS_DENOMINATOR:
        raise InvalidAmount("Slippage must be between 0 and 10000 basis points.")
    return expected_output * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def _price_decimal(price: PriceLike) -> Decimal:
    if isinstance(price, bool):
        raise InvalidAmount("Price must be numeric.")
    try:
        value = Decimal(str(price).strip())
    except InvalidOperation as exc:
        raise InvalidAmount(f"Price is not numeric: {price!r}") from exc
    if not value.is_finite() or value <= 0:
        raise InvalidAmount("Price must be a positive finite number.")
    return value
