from .buyback import (
    estimate_buyback,
    execute_buyback,
    get_buyback_quote_call,
    get_total_burned_call,
    prepare_buyback_with_approval,
)
from .chains import Chain, chain_id_for, parse_chain
from .errors import BuildError, UnsupportedChain, UnsupportedFeeTier
from .governance import (
    approve_budget,
    execute_budget,
    get_current_quarter_call,
    get_hub_treasury_balance_call,
    get_vesting_status_call,
    initialize_vesting,
    propose_budget,
    vote_on_budget,
)
from .identity import (
    get_identity_owner_call,
    label_problem,
    labelhash,
    namehash,
    normalize_name,
    register_identity,
    set_identity_text,
)
from .intents import (
    ApproveIntent,
    BalanceQueryIntent,
    BalanceReadingIntent,
    BridgeFeeIntent,
    BridgeIntent,
    BudgetApprovalIntent,
    BudgetExecutionIntent,
    BudgetIntent,
    BudgetVoteIntent,
    BuybackEstimateIntent,
    BuybackIntent,
    BuybackQuoteIntent,
    BuybackStatsIntent,
    DisburseIntent,
    HubQueryIntent,
    IdentityIntent,
    IdentityOwnerIntent,
    IdentityTextIntent,
    MinOutputIntent,
    PoolInitIntent,
    PoolKeyIntent,
    PriceIntent,
    SqrtPriceIntent,
    SwapIntent,
    TransferIntent,
    VestingIntent,
)
from .manifest import (
    ENS_RECORD_KEYS,
    PROJECT_STAGES,
    ManifestIntent,
    ProjectManifest,
    create_project_manifest,
    parse_project_manifest,
    publish_project_manifest,
)
from .models import BalanceResult, BridgeEstimate, BuybackEstimate, ContractCall, PoolKey, PreparedTx
from .pool_key import compute_pool_id, create_pool_key, tick_spacing_for
from .pools import execute_swap, initialize_pool
from .treasury import (
    approve_usdc,
    bridge_usdc,
    disburse_budget,
    estimate_bridge_fee,
    get_usdc_balance_call,
    parse_balance_result,
    transfer_usdc,
)

__all__ = [
    "ENS_RECORD_KEYS",
    "PROJECT_STAGES",
    "ApproveIntent",
    "BalanceQueryIntent",
    "BalanceReadingIntent",
    "BalanceResult",
    "BridgeEstimate",
    "BridgeFeeIntent",
    "BridgeIntent",
    "BudgetApprovalIntent",
    "BudgetExecutionIntent",
    "BudgetIntent",
    "BudgetVoteIntent",
    "BuildError",
    "BuybackEstimate",
    "BuybackEstimateIntent",
    "BuybackIntent",
    "BuybackQuoteIntent",
    "BuybackStatsIntent",
    "Chain",
    "ContractCall",
    "DisburseIntent",
    "HubQueryIntent",
    "IdentityIntent",
    "IdentityOwnerIntent",
    "IdentityTextIntent",
    "ManifestIntent",
    "MinOutputIntent",
    "PoolInitIntent",
    "PoolKey",
    "PoolKeyIntent",
    "PreparedTx",
    "PriceIntent",
    "ProjectManifest",
    "SqrtPriceIntent",
    "SwapIntent",
    "TransferIntent",
    "UnsupportedChain",
    "UnsupportedFeeTier",
    "VestingIntent",
    "approve_budget",
    "approve_usdc",
    "bridge_usdc",
    "chain_id_for",
    "compute_pool_id",
    "create_pool_key",
    "create_project_manifest",
    "disburse_budget",
    "estimate_bridge_fee",
    "estimate_buyback",
    "execute_budget",
    "execute_buyback",
    "execute_swap",
    "get_buyback_quote_call",
    "get_current_quarter_call",
    "get_hub_treasury_balance_call",
    "get_identity_owner_call",
    "get_total_burned_call",
    "get_usdc_balance_call",
    "get_vesting_status_call",
    "initialize_pool",
    "initialize_vesting",
    "label_problem",
    "labelhash",
    "namehash",
    "normalize_name",
    "parse_balance_result",
    "parse_chain",
    "parse_project_manifest",
    "prepare_buyback_with_approval",
    "propose_budget",
    "publish_project_manifest",
    "register_identity",
    "set_identity_text",
    "tick_spacing_for",
    "transfer_usdc",
    "vote_on_budget",
]
