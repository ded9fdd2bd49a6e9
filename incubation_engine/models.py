"""Domain models for project incubation sessions."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from token_math.amounts import format_usdc
from tx_adapter.evm.models import PreparedTx


class ActionType(Enum):
    MINT_IDENTITY = "mint_identity"
    SETUP_TREASURY = "setup_treasury"
    OPEN_CHANNEL = "open_channel"
    APPROVE_BUDGET = "approve_budget"
    PROCESS_PAYMENT = "process_payment"
    DEPLOY_POOL = "deploy_pool"
    LOCK_LIQUIDITY = "lock_liquidity"
    VERIFY_VESTING = "verify_vesting"


class ActionStatus(Enum):
    PENDING = "pending"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


class Stage(Enum):
    APPLIED = "applied"
    SCREENING = "screening"
    INCUBATING = "incubating"
    LAUNCHING = "launching"
    LAUNCHED = "launched"

    @property
    def rank(self) -> int:
        return _STAGE_ORDER.index(self)


_STAGE_ORDER = (
    Stage.APPLIED,
    Stage.SCREENING,
    Stage.INCUBATING,
    Stage.LAUNCHING,
    Stage.LAUNCHED,
)


class ConversationStep(Enum):
    ASK_IDENTITY_NAME = "ask_identity_name"
    ASK_TREASURY_AMOUNT = "ask_treasury_amount"
    ASK_VESTING_PERIOD = "ask_vesting_period"
    CONFIRM_CONFIG = "confirm_config"
    INCUBATING = "incubating"
    COMPLETED = "completed"


ACTION_DESCRIPTIONS: Dict[ActionType, str] = {
    ActionType.MINT_IDENTITY: "Minting ENS subdomain identity",
    ActionType.SETUP_TREASURY: "Setting up USDC treasury",
    ActionType.OPEN_CHANNEL: "Opening payment channel",
    ActionType.APPROVE_BUDGET: "Approving quarterly budget",
    ActionType.PROCESS_PAYMENT: "Processing contractor payment",
    ActionType.DEPLOY_POOL: "Deploying liquidity pool",
    ActionType.LOCK_LIQUIDITY: "Locking liquidity with the anti-rug hook",
    ActionType.VERIFY_VESTING: "Verifying token vesting schedule",
}


@dataclass(frozen=True)
class Action:
    action_id: str
    action_type: ActionType
    status: ActionStatus
    description: str
    timestamp: str
    tx_hash: Optional[str] = None
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def terminal(self) -> bool:
        return self.status in (ActionStatus.COMPLETED, ActionStatus.FAILED)

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.action_id,
            "type": self.action_type.value,
            "status": self.status.value,
            "description": self.description,
            "timestamp": self.timestamp,
            "tx_hash": self.tx_hash,
            "result": self.result,
            "error": self.error,
        }


@dataclass(frozen=True)
class IncubationConfig:
    """Founder choices; ``treasury_amount`` is in USDC base units."""

    identity_name: Optional[str] = None
    treasury_amount: Optional[int] = None
    vesting_months: Optional[int] = None
    liquidity_percent: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "identity_name": self.identity_name,
            "treasury_amount": self.treasury_amount,
            "treasury_display": (
                format_usdc(self.treasury_amount) if self.treasury_amount is not None else None
            ),
            "vesting_months": self.vesting_months,
            "liquidity_percent": self.liquidity_percent,
        }


@dataclass(frozen=True)
class SessionPatch:
    config: Optional[IncubationConfig] = None
    step: Optional[ConversationStep] = None
    cancel_in_flight: bool = False


@dataclass(frozen=True)
class Response:
    message: str
    suggestions: Tuple[str, ...] = ()
    patch: Optional[SessionPatch] = None
    action_type: Optional[ActionType] = None
    action: Optional[Action] = None
    transactions: Tuple[PreparedTx, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "message": self.message,
            "suggestions": list(self.suggestions),
            "action": self.action.to_dict() if self.action else None,
            "transactions": [tx.to_dict() for tx in self.transactions],
        }
