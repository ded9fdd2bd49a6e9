"""Treasury buyback-and-burn of the project token."""

from decimal import Decimal, localcontext
from typing import Tuple

from token_math.amounts import InvalidAmount, format_token, format_usdc
from token_math.pricing import calculate_min_output

from .abis import BUYBACK_ABI
from .chains import chain_id_for, parse_chain
from .encoding import checksum, encode_call, require_deployed
from .intents import ApproveIntent, BuybackIntent
from .models import BuybackEstimate, ContractCall, PreparedTx
from .treasury import approve_usdc, require_positive_usdc

# USDC has 6 decimals and the project token 18.
_DECIMAL_GAP = Decimal(10) ** 12


def get_buyback_quote_call(buyback_contract: str, usdc_amount: int, chain: str = "base") -> ContractCall:
    resolved = parse_chain(chain)
    if isinstance(usdc_amount, bool) or not isinstance(usdc_amount, int) or usdc_amount <= 0:
        raise InvalidAmount("Quote amount must be a positive integer of USDC base units.")
    return ContractCall(
        to=require_deployed(buyback_contract, "buyback_contract"),
        data=encode_call(BUYBACK_ABI, "getQuote", [usdc_amount]),
        chain_id=chain_id_for(resolved),
    )


def get_total_burned_call(buyback_contract: str, chain: str = "base") -> ContractCall:
    resolved = parse_chain(chain)
    return ContractCall(
        to=require_deployed(buyback_contract, "buyback_contract"),
        data=encode_call(BUYBACK_ABI, "totalBurned", []),
        chain_id=chain_id_for(resolved),
    )


def estimate_buyback(usdc_in: int, consul_out: int, current_price: float) -> BuybackEstimate:
    """Effective USDC-per-token price of a quote and its impact versus spot."""

    if usdc_in <= 0 or consul_out <= 0:
        raise InvalidAmount("Buyback estimate needs positive input and output amounts.")
    if current_price <= 0:
        raise InvalidAmount("Current price must be positive.")

    with localcontext() as ctx:
        ctx.prec = 50
        effective = Decimal(usdc_in) / Decimal(consul_out) * _DECIMAL_GAP
        impact = (effective - Decimal(str(current_price))) / Decimal(str(current_price)) * 100

    return BuybackEstimate(
        usdc_in=usdc_in,
        consul_out=consul_out,
        price_impact=float(impact),
        effective_price=float(effective),
    )


def execute_buyback(intent: BuybackIntent) -> PreparedTx:
    """Swap treasury USDC for the project token and burn it.

    Requires a prior USDC allowance for the buyback contract.
    """

    chain = parse_chain(intent.chain)
    buyback_contract = require_deployed(intent.buyback_contract, "buyback_contract")
    checksum(intent.consul_token, "consul_token")
    usdc_amount = require_positive_usdc(intent.usdc_amount)
    min_out = _min_consul_out(intent)

    return PreparedTx(
        to=buyback_contract,
        data=encode_call(BUYBACK_ABI, "executeBuyback", [usdc_amount, min_out]),
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Buyback: Swap {format_usdc(usdc_amount)} USDC -> "
            f"{format_token(min_out, 'CONSUL')}+ (then burn)"
        ),
    )


def prepare_buyback_with_approval(intent: BuybackIntent) -> Tuple[PreparedTx, PreparedTx]:
    """Allowance grant followed by the buyback itself.

    The second transaction spends the allowance created by the first; submit
    it only after the approval is confirmed.
    """

    approval = approve_usdc(
        ApproveIntent(
            spender=intent.buyback_contract,
            amount=intent.usdc_amount,
            chain=intent.chain,
        )
    )
    return approval, execute_buyback(intent)


def _min_consul_out(intent: BuybackIntent) -> int:
    if intent.min_consul_out is not None:
        return intent.min_consul_out
    return calculate_min_output(intent.expected_consul_out, intent.slippage_bps)
