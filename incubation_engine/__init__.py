from .conversation import ConversationMachine
from .engine import IncubationEngine, SessionNotFoundError
from .interfaces import ContractReader, IdentityResolver, Signer, SignerRejectedError
from .ledger import ActionLedger, LedgerError
from .models import (
    ACTION_DESCRIPTIONS,
    Action,
    ActionStatus,
    ActionType,
    ConversationStep,
    IncubationConfig,
    Response,
    SessionPatch,
    Stage,
)
from .pipeline import INCUBATION_FLOW, next_action, session_stage, stage_for
from .planner import IncubationPlanner, UnimplementedActionError, validate_prepared_tx
from .session import Session
from .settings import IncubatorSettings
from .validation import ConfigValidationError, extract_project_name

__all__ = [
    "ACTION_DESCRIPTIONS",
    "Action",
    "ActionLedger",
    "ActionStatus",
    "ActionType",
    "ConfigValidationError",
    "ContractReader",
    "ConversationMachine",
    "ConversationStep",
    "INCUBATION_FLOW",
    "IdentityResolver",
    "IncubationConfig",
    "IncubationEngine",
    "IncubationPlanner",
    "IncubatorSettings",
    "LedgerError",
    "Response",
    "Session",
    "SessionNotFoundError",
    "SessionPatch",
    "Signer",
    "SignerRejectedError",
    "Stage",
    "UnimplementedActionError",
    "extract_project_name",
    "next_action",
    "session_stage",
    "stage_for",
    "validate_prepared_tx",
]
