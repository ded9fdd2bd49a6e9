"""HubDAO budget proposals and anti-rug vesting on launch pools."""

from token_math.amounts import format_usdc

from .abis import ANTI_RUG_HOOK_ABI, HUB_DAO_ABI
from .chains import chain_id_for, parse_chain
from .encoding import checksum, encode_call, require_deployed, short_address
from .intents import (
    BudgetApprovalIntent,
    BudgetExecutionIntent,
    BudgetIntent,
    BudgetVoteIntent,
    HubQueryIntent,
    VestingIntent,
)
from .models import ContractCall, PoolKey, PreparedTx
from .pool_key import create_pool_key
from .treasury import require_positive_usdc

_DAY = 86_400


def propose_budget(intent: BudgetIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    hub_dao = require_deployed(intent.hub_dao, "hub_dao")
    amount = require_positive_usdc(intent.amount)

    return PreparedTx(
        to=hub_dao,
        data=encode_call(HUB_DAO_ABI, "proposeBudget", [amount]),
        value=0,
        chain_id=chain_id_for(chain),
        description=f"Propose {format_usdc(amount)} budget to HubDAO",
    )


def vote_on_budget(intent: BudgetVoteIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    hub_dao = require_deployed(intent.hub_dao, "hub_dao")
    side = "for" if intent.support else "against"
    return PreparedTx(
        to=hub_dao,
        data=encode_call(HUB_DAO_ABI, "voteOnBudget", [intent.quarter, intent.support]),
        value=0,
        chain_id=chain_id_for(chain),
        description=f"Vote {side} the quarter {intent.quarter} budget",
    )


def approve_budget(intent: BudgetApprovalIntent) -> PreparedTx:
    """Finalize a proposed budget once staker support has reached quorum."""

    chain = parse_chain(intent.chain)
    hub_dao = require_deployed(intent.hub_dao, "hub_dao")
    return PreparedTx(
        to=hub_dao,
        data=encode_call(HUB_DAO_ABI, "approveBudget", [intent.quarter]),
        value=0,
        chain_id=chain_id_for(chain),
        description=f"Approve the quarter {intent.quarter} budget on HubDAO",
    )


def execute_budget(intent: BudgetExecutionIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    hub_dao = require_deployed(intent.hub_dao, "hub_dao")
    recipient = checksum(intent.recipient, "recipient")
    amount = require_positive_usdc(intent.amount)
    return PreparedTx(
        to=hub_dao,
        data=encode_call(HUB_DAO_ABI, "executeBudget", [intent.quarter, recipient, amount]),
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Pay {format_usdc(amount)} from the quarter {intent.quarter} budget "
            f"to {short_address(recipient)}"
        ),
    )


def get_hub_treasury_balance_call(intent: HubQueryIntent) -> ContractCall:
    chain = parse_chain(intent.chain)
    return ContractCall(
        to=require_deployed(intent.hub_dao, "hub_dao"),
        data=encode_call(HUB_DAO_ABI, "getTreasuryBalance", []),
        chain_id=chain_id_for(chain),
    )


def get_current_quarter_call(intent: HubQueryIntent) -> ContractCall:
    chain = parse_chain(intent.chain)
    return ContractCall(
        to=require_deployed(intent.hub_dao, "hub_dao"),
        data=encode_call(HUB_DAO_ABI, "currentQuarter", []),
        chain_id=chain_id_for(chain),
    )


def vesting_pool_key(intent: VestingIntent) -> PoolKey:
    """The pool guarded by the hook: project token against its quote token."""

    hook = require_deployed(intent.hook, "hook")
    return create_pool_key(intent.token, intent.quote_token, intent.fee_tier, hook)


def initialize_vesting(intent: VestingIntent) -> PreparedTx:
    """Lock founder liquidity behind a cliff and linear vesting schedule."""

    chain = parse_chain(intent.chain)
    pool_key = vesting_pool_key(intent)
    founder = checksum(intent.founder, "founder")

    data = encode_call(
        ANTI_RUG_HOOK_ABI,
        "initializeVesting",
        [
            pool_key.as_tuple(),
            founder,
            intent.cliff_seconds,
            intent.vesting_seconds,
            intent.total_locked,
        ],
    )
    return PreparedTx(
        to=pool_key.hooks,
        data=data,
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Lock liquidity for {short_address(founder)}: "
            f"{intent.cliff_seconds // _DAY}d cliff, {intent.vesting_seconds // _DAY}d vesting"
        ),
    )


def get_vesting_status_call(intent: VestingIntent) -> ContractCall:
    chain = parse_chain(intent.chain)
    pool_key = vesting_pool_key(intent)
    return ContractCall(
        to=pool_key.hooks,
        data=encode_call(ANTI_RUG_HOOK_ABI, "getVestingStatus", [pool_key.as_tuple()]),
        chain_id=chain_id_for(chain),
    )
