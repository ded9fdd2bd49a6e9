"""Incubation engine: sessions, conversation and action dispatch."""

import logging
import secrets
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from token_math.amounts import InvalidAmount
from tx_adapter.evm import (
    BalanceResult,
    BuildError,
    PreparedTx,
    get_usdc_balance_call,
    parse_balance_result,
)
from tx_adapter.evm.encoding import checksum
from tx_adapter.evm.identity import identity_name

from .conversation import ConversationMachine
from .interfaces import ContractReader, IdentityResolver, Signer, SignerRejectedError
from .ledger import LedgerError
from .models import (
    ACTION_DESCRIPTIONS,
    Action,
    ActionStatus,
    ActionType,
    ConversationStep,
    Response,
)
from .pipeline import next_action
from .planner import IncubationPlanner, UnimplementedActionError
from .session import Session
from .settings import IncubatorSettings
from .validation import extract_project_name

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "My Project"
RESET_REASON = "Cancelled by reset"


class SessionNotFoundError(KeyError):
    """Raised for an unknown session id."""

    def __str__(self) -> str:
        return f"Unknown session: {self.args[0]}" if self.args else "Unknown session"


class IncubationEngine:
    """Runs incubation sessions; prepares transactions but never signs them.

    With a ``signer`` the first prepared transaction of an action is submitted
    and the action moves to executing; each later transaction is submitted
    only after ``confirm_action`` reports the previous one mined. Without one the action stays
    pending and the transactions are returned for the host to sign, after
    which it reports back through ``mark_submitted``, ``confirm_action`` or
    ``fail_action``.
    """

    def __init__(
        self,
        settings: Optional[IncubatorSettings] = None,
        signer: Optional[Signer] = None,
        identity_resolver: Optional[IdentityResolver] = None,
        contract_reader: Optional[ContractReader] = None,
        time_provider: Optional[Callable[[], str]] = None,
        id_provider: Optional[Callable[[], str]] = None,
    ) -> None:
        self._settings = settings or IncubatorSettings()
        self._signer = signer
        self._reader = contract_reader
        self._time_provider = time_provider or _utc_timestamp
        self._id_provider = id_provider or _random_id
        self._planner = IncubationPlanner(self._settings)
        self._machine = ConversationMachine(
            self._settings,
            identity_resolver.is_available if identity_resolver is not None else None,
        )
        self._sessions: Dict[str, Session] = {}
        self._queued: Dict[str, Tuple[PreparedTx, ...]] = {}

    @property
    def settings(self) -> IncubatorSettings:
        return self._settings

    def create_session(self, project_name: str, founder: str) -> Session:
        name = project_name.strip() or DEFAULT_PROJECT_NAME
        session = Session(
            session_id=f"session_{self._id_provider()}",
            project_name=name,
            founder=checksum(founder, "founder"),
            started_at=self._time_provider(),
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s for %r", session.session_id, name)
        return session

    def start_session(self, text: str, founder: str) -> Tuple[Session, Response]:
        session = self.create_session(extract_project_name(text) or DEFAULT_PROJECT_NAME, founder)
        return session, self.greeting(session.session_id)

    def greeting(self, session_id: str) -> Response:
        return self._machine.greeting(self.get_session(session_id))

    def get_session(self, session_id: str) -> Session:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def sessions(self) -> Tuple[Session, ...]:
        return tuple(self._sessions.values())

    def next_action(self, completed: Iterable[Union[ActionType, str]]) -> Optional[ActionType]:
        return next_action(completed)

    def handle_message(self, session_id: str, text: str) -> Response:
        session = self.get_session(session_id)
        response = self._machine.respond(session, text)

        patch = response.patch
        if patch is not None:
            if patch.config is not None:
                session.config = patch.config
            if patch.cancel_in_flight:
                self._cancel(session)
            if patch.step is not None and patch.step != session.step:
                logger.info(
                    "Session %s: %s -> %s", session_id, session.step.value, patch.step.value
                )
                session.step = patch.step
                if patch.step == ConversationStep.COMPLETED and session.completed_at is None:
                    session.completed_at = self._time_provider()

        if response.action_type is not None:
            return self._dispatch(session, response)
        return response

    def mark_submitted(self, session_id: str, action_id: str, tx_hash: str) -> Action:
        session = self.get_session(session_id)
        action = session.ledger.transition(action_id, ActionStatus.EXECUTING, tx_hash=tx_hash)
        logger.info("Session %s: %s submitted as %s", session_id, action_id, tx_hash)
        return action

    def confirm_action(
        self,
        session_id: str,
        action_id: str,
        tx_hash: Optional[str] = None,
        result: Optional[str] = None,
    ) -> Action:
        """Record on-chain confirmation; the ledger re-derives the stage.

        While the signer still has queued transactions for the action, the
        confirmation releases the next one and the action stays executing.
        """

        session = self.get_session(session_id)
        if self._queued.get(action_id):
            return self._submit_next(session, action_id)
        if session.ledger.get(action_id).status == ActionStatus.PENDING:
            session.ledger.transition(action_id, ActionStatus.EXECUTING, tx_hash=tx_hash)
        action = session.ledger.transition(
            action_id, ActionStatus.COMPLETED, tx_hash=tx_hash, result=result
        )

        if action.action_type == ActionType.MINT_IDENTITY and session.config.identity_name:
            session.identity_name = identity_name(
                session.config.identity_name, self._settings.parent_domain
            )
        if next_action(session.ledger.completed_types()) is None:
            session.step = ConversationStep.COMPLETED
            session.completed_at = session.completed_at or self._time_provider()

        logger.info(
            "Session %s: %s completed, stage %s",
            session_id,
            action.action_type.value,
            session.stage.value,
        )
        return action

    def fail_action(self, session_id: str, action_id: str, error: str) -> Action:
        session = self.get_session(session_id)
        action = session.ledger.transition(action_id, ActionStatus.FAILED, error=error)
        self._queued.pop(action_id, None)
        logger.warning("Session %s: %s failed: %s", session_id, action.action_type.value, error)
        return action

    def reset(self, session_id: str) -> Tuple[Action, ...]:
        return self._cancel(self.get_session(session_id))

    def treasury_balance(self, session_id: str) -> BalanceResult:
        """Read the treasury's USDC balance through the contract reader."""

        self.get_session(session_id)
        if self._reader is None:
            raise BuildError("No contract reader is configured.")
        if not self._settings.treasury_address:
            raise BuildError("The treasury address is not configured.")
        call = get_usdc_balance_call(self._settings.treasury_address, self._settings.chain)
        raw = self._reader.call(call)
        return parse_balance_result("0x" + bytes(raw).hex(), self._settings.chain)

    def _dispatch(self, session: Session, response: Response) -> Response:
        action_type = response.action_type
        action = session.ledger.append(
            Action(
                action_id=f"action_{self._id_provider()}",
                action_type=action_type,
                status=ActionStatus.PENDING,
                description=ACTION_DESCRIPTIONS[action_type],
                timestamp=self._time_provider(),
            )
        )

        try:
            transactions = self._planner.plan(action_type, session)
        except (BuildError, InvalidAmount, UnimplementedActionError) as exc:
            failed = session.ledger.transition(action.action_id, ActionStatus.FAILED, error=str(exc))
            logger.warning(
                "Session %s: could not prepare %s: %s", session.session_id, action_type.value, exc
            )
            return replace(
                response,
                message=f"Could not prepare {failed.description.lower()}: {exc}\n\n"
                'Type "continue" to retry.',
                suggestions=("Continue", "Show status"),
                action=failed,
            )

        if self._signer is None:
            logger.info(
                "Session %s: prepared %d transaction(s) for %s",
                session.session_id,
                len(transactions),
                action_type.value,
            )
            return replace(
                response,
                message=f"{response.message}\n\nSign {len(transactions)} transaction(s) to proceed.",
                action=action,
                transactions=transactions,
            )

        try:
            tx_hash = self._signer.submit(transactions[0])
        except SignerRejectedError as exc:
            failed = session.ledger.transition(
                action.action_id, ActionStatus.FAILED, error=str(exc)
            )
            logger.warning(
                "Session %s: signer rejected %s: %s", session.session_id, action_type.value, exc
            )
            return replace(
                response,
                message=f"Signing was rejected: {exc}\n\nType \"continue\" to retry.",
                suggestions=("Continue", "Show status"),
                action=failed,
                transactions=transactions,
            )

        submitted = session.ledger.transition(
            action.action_id, ActionStatus.EXECUTING, tx_hash=tx_hash
        )
        if len(transactions) > 1:
            self._queued[action.action_id] = transactions[1:]
        logger.info(
            "Session %s: submitted %s as %s (1 of %d)",
            session.session_id,
            action_type.value,
            tx_hash,
            len(transactions),
        )
        return replace(
            response,
            message=f"{response.message}\n\nSubmitted {tx_hash}; waiting for confirmation.",
            action=submitted,
            transactions=transactions,
        )

    def _submit_next(self, session: Session, action_id: str) -> Action:
        """Submit the next queued transaction once the previous one is mined."""

        remaining = self._queued.pop(action_id)
        if session.ledger.get(action_id).status != ActionStatus.EXECUTING:
            raise LedgerError(f"Action {action_id} is not executing.")
        try:
            tx_hash = self._signer.submit(remaining[0])
        except SignerRejectedError as exc:
            action = session.ledger.transition(action_id, ActionStatus.FAILED, error=str(exc))
            logger.warning(
                "Session %s: signer rejected a follow-up of %s: %s",
                session.session_id,
                action.action_type.value,
                exc,
            )
            return action

        if len(remaining) > 1:
            self._queued[action_id] = remaining[1:]
        action = session.ledger.record_submission(action_id, tx_hash)
        logger.info(
            "Session %s: submitted %s follow-up as %s, %d left",
            session.session_id,
            action.action_type.value,
            tx_hash,
            len(remaining) - 1,
        )
        return action

    def _cancel(self, session: Session) -> Tuple[Action, ...]:
        cancelled = session.ledger.cancel_in_flight(RESET_REASON)
        for action in cancelled:
            self._queued.pop(action.action_id, None)
        if cancelled:
            logger.info(
                "Session %s: cancelled %s",
                session.session_id,
                ", ".join(action.action_type.value for action in cancelled),
            )
        return cancelled


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _random_id() -> str:
    return secrets.token_hex(6)
