"""Incubation session state."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .ledger import ActionLedger
from .models import ActionType, ConversationStep, IncubationConfig, Stage
from .pipeline import session_stage


@dataclass
class Session:
    """One founder's incubation attempt.

    ``stage`` and the display flags are computed from the ledger on every
    read and cannot be assigned.
    """

    session_id: str
    project_name: str
    founder: str
    started_at: str
    config: IncubationConfig = field(default_factory=IncubationConfig)
    step: ConversationStep = ConversationStep.ASK_IDENTITY_NAME
    ledger: ActionLedger = field(default_factory=ActionLedger)
    identity_name: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def confirmed(self) -> bool:
        return self.step in (ConversationStep.INCUBATING, ConversationStep.COMPLETED)

    @property
    def stage(self) -> Stage:
        return session_stage(self.ledger.completed_count(), self.confirmed)

    @property
    def identity_registered(self) -> bool:
        return ActionType.MINT_IDENTITY in self.ledger.completed_types()

    @property
    def pool_deployed(self) -> bool:
        return ActionType.DEPLOY_POOL in self.ledger.completed_types()

    @property
    def lock_active(self) -> bool:
        return ActionType.LOCK_LIQUIDITY in self.ledger.completed_types()

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.session_id,
            "project_name": self.project_name,
            "founder": self.founder,
            "identity_name": self.identity_name,
            "stage": self.stage.value,
            "step": self.step.value,
            "config": self.config.to_dict(),
            "actions": [action.to_dict() for action in self.ledger],
            "identity_registered": self.identity_registered,
            "pool_deployed": self.pool_deployed,
            "lock_active": self.lock_active,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
        }
