from .amounts import (
    TOKEN_DECIMALS,
    USDC_DECIMALS,
    InvalidAmount,
    format_token,
    format_usdc,
    from_base_units,
    parse_decimal,
    parse_token,
    parse_usdc,
    to_base_units,
)
from .pricing import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    Q96,
    calculate_min_output,
    price_to_sqrt_price_x96,
    sqrt_price_x96_to_price,
)

__all__ = [
    "InvalidAmount",
    "MAX_SQRT_PRICE",
    "MIN_SQRT_PRICE",
    "Q96",
    "TOKEN_DECIMALS",
    "USDC_DECIMALS",
    "calculate_min_output",
    "format_token",
    "format_usdc",
    "from_base_units",
    "parse_decimal",
    "parse_token",
    "parse_usdc",
    "price_to_sqrt_price_x96",
    "sqrt_price_x96_to_price",
    "to_base_units",
]
