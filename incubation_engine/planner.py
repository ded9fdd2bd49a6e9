"""Maps pipeline actions to the unsigned transactions that perform them."""

from typing import Optional, Tuple

from eth_utils import is_checksum_address

from agent_tools import invoke
from token_math.amounts import TOKEN_DECIMALS, USDC_DECIMALS, from_base_units
from tx_adapter.evm import BuildError, PreparedTx
from tx_adapter.evm.chains import CHAIN_IDS, USDC_ADDRESSES, lookup, parse_chain

from .models import ActionType
from .session import Session
from .settings import IncubatorSettings

_SECONDS_PER_MONTH = 30 * 86_400


class UnimplementedActionError(ValueError):
    """Raised when the planner has no transactions for an action type."""


class IncubationPlanner:
    """Builds the prepared transactions for one pipeline action."""

    def __init__(self, settings: Optional[IncubatorSettings] = None) -> None:
        self._settings = settings or IncubatorSettings()

    def plan(self, action_type: ActionType, session: Session) -> Tuple[PreparedTx, ...]:
        handlers = {
            ActionType.MINT_IDENTITY: self._mint_identity,
            ActionType.SETUP_TREASURY: self._setup_treasury,
            ActionType.OPEN_CHANNEL: self._open_channel,
            ActionType.APPROVE_BUDGET: self._approve_budget,
            ActionType.DEPLOY_POOL: self._deploy_pool,
            ActionType.LOCK_LIQUIDITY: self._lock_liquidity,
        }
        handler = handlers.get(action_type)
        if handler is None:
            raise UnimplementedActionError(f"No transactions for action {action_type.value}.")

        result = handler(session)
        transactions = result if isinstance(result, tuple) else (result,)
        for tx in transactions:
            validate_prepared_tx(tx)
        return transactions

    def _mint_identity(self, session: Session) -> PreparedTx:
        intent = {
            "label": _required(session.config.identity_name, "identity name"),
            "owner": session.founder,
            "parent_domain": self._settings.parent_domain,
            "chain": self._settings.identity_chain,
        }
        if self._settings.ens_resolver_address:
            intent["resolver"] = self._settings.ens_resolver_address
        return invoke("register_identity", intent)

    def _setup_treasury(self, session: Session) -> PreparedTx:
        return invoke(
            "transfer_usdc",
            {
                "to": _required(self._settings.treasury_address, "treasury address"),
                "amount": self._treasury_amount(session),
                "chain": self._settings.chain,
            },
        )

    def _open_channel(self, session: Session) -> PreparedTx:
        return invoke(
            "approve_usdc",
            {
                "spender": _required(
                    self._settings.channel_custody_address, "channel custody address"
                ),
                "amount": self._treasury_amount(session),
                "chain": self._settings.chain,
            },
        )

    def _approve_budget(self, session: Session) -> PreparedTx:
        """Propose the budget, or approve it once a quarter has been voted through."""

        hub_dao = _required(self._settings.hub_dao_address, "HubDAO address")
        if self._settings.budget_quarter is not None:
            return invoke(
                "approve_budget",
                {
                    "hub_dao": hub_dao,
                    "quarter": self._settings.budget_quarter,
                    "chain": self._settings.chain,
                },
            )
        return invoke(
            "propose_budget",
            {
                "hub_dao": hub_dao,
                "amount": self._treasury_amount(session),
                "chain": self._settings.chain,
            },
        )

    def _deploy_pool(self, session: Session) -> PreparedTx:
        return invoke(
            "initialize_pool",
            {
                "token": self._project_token(),
                "quote_token": self._usdc(),
                "fee_tier": self._settings.pool_fee_tier,
                "initial_price": self._settings.initial_price,
                "hooks": _required(self._settings.anti_rug_hook_address, "anti-rug hook address"),
                "chain": self._settings.chain,
            },
        )

    def _lock_liquidity(self, session: Session) -> PreparedTx:
        vesting_months = _required(session.config.vesting_months, "vesting period")
        liquidity_percent = (
            session.config.liquidity_percent or self._settings.liquidity_percent
        )
        supply = self._settings.token_supply * 10**TOKEN_DECIMALS
        return invoke(
            "initialize_vesting",
            {
                "hook": _required(self._settings.anti_rug_hook_address, "anti-rug hook address"),
                "token": self._project_token(),
                "quote_token": self._usdc(),
                "fee_tier": self._settings.pool_fee_tier,
                "founder": session.founder,
                "cliff_seconds": self._settings.cliff_months * _SECONDS_PER_MONTH,
                "vesting_seconds": vesting_months * _SECONDS_PER_MONTH,
                "total_locked": supply * liquidity_percent // 100,
                "chain": self._settings.chain,
            },
        )

    def _treasury_amount(self, session: Session) -> str:
        amount = _required(session.config.treasury_amount, "treasury amount")
        return from_base_units(amount, USDC_DECIMALS)

    def _project_token(self) -> str:
        return _required(self._settings.project_token_address, "project token address")

    def _usdc(self) -> str:
        return lookup(USDC_ADDRESSES, parse_chain(self._settings.chain), "USDC")


def validate_prepared_tx(tx: PreparedTx) -> None:
    if not isinstance(tx.to, str) or not is_checksum_address(tx.to):
        raise BuildError("Prepared transaction target must be a checksummed address.")
    data = tx.data[2:] if isinstance(tx.data, str) and tx.data.startswith("0x") else None
    if data is None or len(data) < 8 or len(data) % 2:
        raise BuildError("Prepared transaction data must be 0x-prefixed calldata.")
    try:
        bytes.fromhex(data)
    except ValueError as exc:
        raise BuildError("Prepared transaction data is not hex.") from exc
    if isinstance(tx.value, bool) or not isinstance(tx.value, int) or tx.value < 0:
        raise BuildError("Prepared transaction value must be a non-negative integer.")
    if tx.chain_id not in CHAIN_IDS.values():
        raise BuildError(f"Prepared transaction targets an unknown chain id {tx.chain_id}.")
    if not tx.description:
        raise BuildError("Prepared transaction needs a description.")


def _required(value, label: str):
    if value is None or value == "":
        raise BuildError(f"The {label} is not configured.")
    return value
