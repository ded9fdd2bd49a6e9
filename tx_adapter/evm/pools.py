"""Pool manager operations: pool initialization and exact-input swaps."""

from token_math.amounts import InvalidAmount, format_token
from token_math.pricing import MAX_SQRT_PRICE, MIN_SQRT_PRICE, price_to_sqrt_price_x96

from .abis import POOL_MANAGER_ABI
from .chains import POOL_MANAGERS, chain_id_for, lookup, parse_chain
from .encoding import checksum, encode_call
from .intents import PoolInitIntent, SwapIntent
from .models import PreparedTx
from .pool_key import create_pool_key


def initialize_pool(intent: PoolInitIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    pool_manager = lookup(POOL_MANAGERS, chain, "Pool manager")
    pool_key = create_pool_key(intent.token, intent.quote_token, intent.fee_tier, intent.hooks)

    if intent.sqrt_price_x96 is not None:
        sqrt_price = intent.sqrt_price_x96
        if not MIN_SQRT_PRICE <= sqrt_price < MAX_SQRT_PRICE:
            raise InvalidAmount("sqrtPriceX96 is outside the range a pool can represent.")
    else:
        sqrt_price = price_to_sqrt_price_x96(intent.initial_price)

    data = encode_call(POOL_MANAGER_ABI, "initialize", [pool_key.as_tuple(), sqrt_price])
    return PreparedTx(
        to=pool_manager,
        data=data,
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Initialize pool: {pool_key.currency0[:6]}/{pool_key.currency1[:6]} "
            f"({_fee_percent(pool_key.fee)} fee)"
        ),
    )


def execute_swap(intent: SwapIntent) -> PreparedTx:
    """Exact-input swap through the pool manager.

    The pool manager treats a negative ``amountSpecified`` as exact input. The
    minimum output travels in the description only; enforcing it is the
    router's job, and the quote behind it is the caller's.
    """

    chain = parse_chain(intent.chain)
    pool_manager = lookup(POOL_MANAGERS, chain, "Pool manager")
    token_in = checksum(intent.token_in, "token_in")
    token_out = checksum(intent.token_out, "token_out")
    pool_key = create_pool_key(token_in, token_out, intent.fee_tier, intent.hooks)

    zero_for_one = token_in == pool_key.currency0
    price_limit = MIN_SQRT_PRICE + 1 if zero_for_one else MAX_SQRT_PRICE - 1
    params = (zero_for_one, -intent.amount_in, price_limit)

    data = encode_call(POOL_MANAGER_ABI, "swap", [pool_key.as_tuple(), params, b""])
    return PreparedTx(
        to=pool_manager,
        data=data,
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Swap {format_token(intent.amount_in)} {token_in[:6]} -> {token_out[:6]} "
            f"(min out {format_token(intent.min_amount_out)})"
        ),
    )


def _fee_percent(fee: int) -> str:
    return f"{fee / 10000:g}%"
