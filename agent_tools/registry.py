"""Static catalog of transaction builders for a calling agent.

Tools are grouped by the system they target. Each tool pairs a builder with
the intent model it accepts, so an agent can discover operations through
``list_tools`` and call them through ``invoke`` with a plain mapping.
Write tools return unsigned transactions, read tools return a view call for
a contract reader, and helpers compute a value offline.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Tuple, Type, Union

from pydantic import ValidationError

from token_math.pricing import calculate_min_output, price_to_sqrt_price_x96, sqrt_price_x96_to_price
from tx_adapter.evm import (
    ApproveIntent,
    BalanceQueryIntent,
    BalanceReadingIntent,
    BalanceResult,
    BridgeEstimate,
    BridgeFeeIntent,
    BridgeIntent,
    BudgetApprovalIntent,
    BudgetExecutionIntent,
    BudgetIntent,
    BudgetVoteIntent,
    BuildError,
    BuybackEstimate,
    BuybackEstimateIntent,
    BuybackIntent,
    BuybackQuoteIntent,
    BuybackStatsIntent,
    ContractCall,
    DisburseIntent,
    HubQueryIntent,
    IdentityIntent,
    IdentityOwnerIntent,
    IdentityTextIntent,
    ManifestIntent,
    MinOutputIntent,
    PoolInitIntent,
    PoolKey,
    PoolKeyIntent,
    PreparedTx,
    PriceIntent,
    SqrtPriceIntent,
    SwapIntent,
    TransferIntent,
    VestingIntent,
    approve_budget,
    approve_usdc,
    bridge_usdc,
    compute_pool_id,
    create_pool_key,
    disburse_budget,
    estimate_bridge_fee,
    estimate_buyback,
    execute_budget,
    execute_buyback,
    execute_swap,
    get_buyback_quote_call,
    get_current_quarter_call,
    get_hub_treasury_balance_call,
    get_identity_owner_call,
    get_total_burned_call,
    get_usdc_balance_call,
    get_vesting_status_call,
    initialize_pool,
    initialize_vesting,
    parse_balance_result,
    prepare_buyback_with_approval,
    propose_budget,
    publish_project_manifest,
    register_identity,
    set_identity_text,
    transfer_usdc,
    vote_on_budget,
)
from tx_adapter.evm.intents import Intent
from tx_adapter.evm.treasury import require_positive_usdc

ToolResult = Union[
    PreparedTx,
    Tuple[PreparedTx, ...],
    ContractCall,
    PoolKey,
    BalanceResult,
    BridgeEstimate,
    BuybackEstimate,
    str,
    int,
    float,
]
Builder = Callable[[Any], ToolResult]


def _frozen(table: Dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(table))


def _usdc_balance(intent: BalanceQueryIntent) -> ContractCall:
    return get_usdc_balance_call(intent.address, intent.chain)


def _balance_reading(intent: BalanceReadingIntent) -> BalanceResult:
    return parse_balance_result(intent.result, intent.chain)


def _bridge_fee(intent: BridgeFeeIntent) -> BridgeEstimate:
    return estimate_bridge_fee(intent.amount, intent.source_chain, intent.destination_chain)


def _buyback_quote(intent: BuybackQuoteIntent) -> ContractCall:
    amount = require_positive_usdc(intent.usdc_amount)
    return get_buyback_quote_call(intent.buyback_contract, amount, intent.chain)


def _total_burned(intent: BuybackStatsIntent) -> ContractCall:
    return get_total_burned_call(intent.buyback_contract, intent.chain)


def _buyback_estimate(intent: BuybackEstimateIntent) -> BuybackEstimate:
    return estimate_buyback(intent.usdc_in, intent.consul_out, intent.current_price)


def _pool_key(intent: PoolKeyIntent) -> PoolKey:
    return create_pool_key(intent.token_a, intent.token_b, intent.fee_tier, intent.hooks)


def _pool_id(intent: PoolKeyIntent) -> str:
    return compute_pool_id(_pool_key(intent))


def _sqrt_price(intent: PriceIntent) -> int:
    return price_to_sqrt_price_x96(intent.price)


def _price(intent: SqrtPriceIntent) -> float:
    return sqrt_price_x96_to_price(intent.sqrt_price_x96)


def _min_output(intent: MinOutputIntent) -> int:
    return calculate_min_output(intent.expected_output, intent.slippage_bps)


def _identity_owner(intent: IdentityOwnerIntent) -> ContractCall:
    return get_identity_owner_call(intent.name, intent.chain)


AGENT_TOOLS: Mapping[str, Mapping[str, Builder]] = _frozen(
    {
        "treasury": _frozen(
            {
                "transfer_usdc": transfer_usdc,
                "approve_usdc": approve_usdc,
                "bridge_usdc": bridge_usdc,
                "disburse_budget": disburse_budget,
                "get_usdc_balance": _usdc_balance,
                "parse_balance_result": _balance_reading,
                "estimate_bridge_fee": _bridge_fee,
            }
        ),
        "pools": _frozen(
            {
                "initialize_pool": initialize_pool,
                "execute_swap": execute_swap,
                "create_pool_key": _pool_key,
                "compute_pool_id": _pool_id,
                "price_to_sqrt_price_x96": _sqrt_price,
                "sqrt_price_x96_to_price": _price,
                "calculate_min_output": _min_output,
            }
        ),
        "buyback": _frozen(
            {
                "execute_buyback": execute_buyback,
                "prepare_buyback_with_approval": prepare_buyback_with_approval,
                "get_buyback_quote": _buyback_quote,
                "get_total_burned": _total_burned,
                "estimate_buyback": _buyback_estimate,
            }
        ),
        "incubation": _frozen(
            {
                "register_identity": register_identity,
                "set_identity_text": set_identity_text,
                "publish_project_manifest": publish_project_manifest,
                "get_identity_owner": _identity_owner,
                "propose_budget": propose_budget,
                "vote_on_budget": vote_on_budget,
                "approve_budget": approve_budget,
                "execute_budget": execute_budget,
                "get_hub_treasury_balance": get_hub_treasury_balance_call,
                "get_current_quarter": get_current_quarter_call,
                "initialize_vesting": initialize_vesting,
                "get_vesting_status": get_vesting_status_call,
            }
        ),
    }
)

TOOL_DESCRIPTIONS: Mapping[str, str] = _frozen(
    {
        "transfer_usdc": "Transfer USDC from the treasury to an address",
        "approve_usdc": "Approve a contract to spend treasury USDC",
        "bridge_usdc": "Bridge USDC to another chain via CCTP",
        "disburse_budget": "Disburse an approved budget to a squad on Base",
        "get_usdc_balance": "Read call for an address's USDC balance",
        "parse_balance_result": "Decode a balanceOf result into a USDC balance",
        "estimate_bridge_fee": "Estimate the fee and net amount for a CCTP bridge",
        "initialize_pool": "Create a new liquidity pool with an initial price",
        "execute_swap": "Swap an exact input amount through a pool",
        "create_pool_key": "Build a sorted pool key for a token pair and fee tier",
        "compute_pool_id": "Compute the pool id for a token pair and fee tier",
        "price_to_sqrt_price_x96": "Convert a price to Q64.96 sqrt price",
        "sqrt_price_x96_to_price": "Convert a Q64.96 sqrt price back to a price",
        "calculate_min_output": "Apply slippage tolerance to an expected output",
        "execute_buyback": "Buy back the project token with USDC and burn it",
        "prepare_buyback_with_approval": "Approve USDC, then execute a buyback (two transactions)",
        "get_buyback_quote": "Read call quoting tokens received for a USDC amount",
        "get_total_burned": "Read call for the total tokens burned by buybacks",
        "estimate_buyback": "Estimate effective price and price impact of a buyback",
        "register_identity": "Register a project subdomain under the parent ENS name",
        "set_identity_text": "Set a text record on a project's ENS name",
        "publish_project_manifest": "Write a project manifest and its stage to ENS text records",
        "get_identity_owner": "Read call for the owner of an ENS name",
        "propose_budget": "Propose a USDC budget to the HubDAO",
        "vote_on_budget": "Vote for or against a quarter's HubDAO budget",
        "approve_budget": "Approve a quarter's HubDAO budget once quorum is reached",
        "execute_budget": "Pay out from an approved HubDAO budget",
        "get_hub_treasury_balance": "Read call for the HubDAO treasury balance",
        "get_current_quarter": "Read call for the HubDAO's current budget quarter",
        "initialize_vesting": "Lock founder liquidity behind a cliff and vesting schedule",
        "get_vesting_status": "Read call for a pool's founder vesting status",
    }
)

TOOL_INTENTS: Mapping[str, Type[Intent]] = _frozen(
    {
        "transfer_usdc": TransferIntent,
        "approve_usdc": ApproveIntent,
        "bridge_usdc": BridgeIntent,
        "disburse_budget": DisburseIntent,
        "get_usdc_balance": BalanceQueryIntent,
        "parse_balance_result": BalanceReadingIntent,
        "estimate_bridge_fee": BridgeFeeIntent,
        "initialize_pool": PoolInitIntent,
        "execute_swap": SwapIntent,
        "create_pool_key": PoolKeyIntent,
        "compute_pool_id": PoolKeyIntent,
        "price_to_sqrt_price_x96": PriceIntent,
        "sqrt_price_x96_to_price": SqrtPriceIntent,
        "calculate_min_output": MinOutputIntent,
        "execute_buyback": BuybackIntent,
        "prepare_buyback_with_approval": BuybackIntent,
        "get_buyback_quote": BuybackQuoteIntent,
        "get_total_burned": BuybackStatsIntent,
        "estimate_buyback": BuybackEstimateIntent,
        "register_identity": IdentityIntent,
        "set_identity_text": IdentityTextIntent,
        "publish_project_manifest": ManifestIntent,
        "get_identity_owner": IdentityOwnerIntent,
        "propose_budget": BudgetIntent,
        "vote_on_budget": BudgetVoteIntent,
        "approve_budget": BudgetApprovalIntent,
        "execute_budget": BudgetExecutionIntent,
        "get_hub_treasury_balance": HubQueryIntent,
        "get_current_quarter": HubQueryIntent,
        "initialize_vesting": VestingIntent,
        "get_vesting_status": VestingIntent,
    }
)

_READS = frozenset(
    {
        "get_usdc_balance",
        "get_buyback_quote",
        "get_total_burned",
        "get_identity_owner",
        "get_hub_treasury_balance",
        "get_current_quarter",
        "get_vesting_status",
    }
)
_HELPERS = frozenset(
    {
        "parse_balance_result",
        "estimate_bridge_fee",
        "create_pool_key",
        "compute_pool_id",
        "price_to_sqrt_price_x96",
        "sqrt_price_x96_to_price",
        "calculate_min_output",
        "estimate_buyback",
    }
)

TOOL_KINDS: Mapping[str, str] = _frozen(
    {
        name: "read" if name in _READS else "helper" if name in _HELPERS else "write"
        for name in TOOL_DESCRIPTIONS
    }
)

_BUILDERS: Mapping[str, Builder] = _frozen(
    {name: builder for group in AGENT_TOOLS.values() for name, builder in group.items()}
)

def list_tools() -> List[Tuple[str, str]]:
    return sorted(TOOL_DESCRIPTIONS.items())


def tool_group(name: str) -> str:
    for group, tools in AGENT_TOOLS.items():
        if name in tools:
            return group
    raise BuildError(f"Unknown tool: {name}")


def build_intent(name: str, intent: Union[Intent, Mapping[str, Any]]) -> Intent:
    """Validate ``intent`` against the model the tool accepts."""

    try:
        model = TOOL_INTENTS[name]
    except KeyError:
        raise BuildError(f"Unknown tool: {name}") from None

    if isinstance(intent, model):
        return intent
    if not isinstance(intent, Mapping):
        raise BuildError(f"{name} expects a {model.__name__} or a mapping of its fields.")
    try:
        return model.model_validate(dict(intent))
    except ValidationError as exc:
        raise BuildError(f"Invalid intent for {name}: {_summarize(exc)}") from exc


def invoke(name: str, intent: Union[Intent, Mapping[str, Any]]) -> ToolResult:
    """Run a tool and return its unsigned transaction(s), read call or computed value."""

    validated = build_intent(name, intent)
    return _BUILDERS[name](validated)


def serialize_result(result: ToolResult) -> Any:
    """JSON-ready form of a tool result: transactions, calls and estimates as dicts."""

    if isinstance(result, tuple):
        return [serialize_result(item) for item in result]
    to_dict = getattr(result, "to_dict", None)
    if to_dict is not None:
        return to_dict()
    return result


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "intent"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)
