"""Append-only record of a session's actions."""

from dataclasses import replace
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .models import Action, ActionStatus, ActionType


class LedgerError(ValueError):
    """Raised when an action is appended or moved in a way the ledger forbids."""


# Status only moves forward; completed and failed are terminal.
_ALLOWED_TRANSITIONS: Dict[ActionStatus, Tuple[ActionStatus, ...]] = {
    ActionStatus.PENDING: (ActionStatus.EXECUTING, ActionStatus.FAILED),
    ActionStatus.EXECUTING: (ActionStatus.COMPLETED, ActionStatus.FAILED),
    ActionStatus.COMPLETED: (),
    ActionStatus.FAILED: (),
}


class ActionLedger:
    """Ordered actions of one session with at most one action in flight."""

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        self._actions: List[Action] = []
        for action in actions:
            self._insert(action)

    def __iter__(self) -> Iterator[Action]:
        return iter(tuple(self._actions))

    def __len__(self) -> int:
        return len(self._actions)

    def entries(self) -> Tuple[Action, ...]:
        return tuple(self._actions)

    def append(self, action: Action) -> Action:
        if action.status != ActionStatus.PENDING:
            raise LedgerError("New actions must start as pending.")
        in_flight = self.in_flight()
        if in_flight is not None:
            raise LedgerError(
                f"Action {in_flight.action_id} ({in_flight.action_type.value}) is still in flight."
            )
        return self._insert(action)

    def get(self, action_id: str) -> Action:
        return self._actions[self._index(action_id)]

    def transition(
        self,
        action_id: str,
        status: ActionStatus,
        tx_hash: Optional[str] = None,
        result: Optional[str] = None,
        error: Optional[str] = None,
    ) -> Action:
        index = self._index(action_id)
        current = self._actions[index]
        if status not in _ALLOWED_TRANSITIONS[current.status]:
            raise LedgerError(
                f"Action {action_id} cannot move from {current.status.value} to {status.value}."
            )
        updated = replace(
            current,
            status=status,
            tx_hash=tx_hash if tx_hash is not None else current.tx_hash,
            result=result if result is not None else current.result,
            error=error if error is not None else current.error,
        )
        self._actions[index] = updated
        return updated

    def record_submission(self, action_id: str, tx_hash: str) -> Action:
        """Point an executing action at the latest of its submitted transactions."""

        index = self._index(action_id)
        current = self._actions[index]
        if current.status != ActionStatus.EXECUTING:
            raise LedgerError(
                f"Action {action_id} is {current.status.value}; only executing actions "
                "can record a follow-up submission."
            )
        updated = replace(current, tx_hash=tx_hash)
        self._actions[index] = updated
        return updated

    def completed_types(self) -> FrozenSet[ActionType]:
        return frozenset(
            action.action_type
            for action in self._actions
            if action.status == ActionStatus.COMPLETED
        )

    def completed_count(self) -> int:
        return sum(1 for action in self._actions if action.status == ActionStatus.COMPLETED)

    def in_flight(self) -> Optional[Action]:
        for action in self._actions:
            if not action.terminal:
                return action
        return None

    def cancel_in_flight(self, reason: str) -> Tuple[Action, ...]:
        """Fail every non-terminal action; completed entries are untouched."""

        cancelled = []
        for action in tuple(self._actions):
            if not action.terminal:
                cancelled.append(
                    self.transition(action.action_id, ActionStatus.FAILED, error=reason)
                )
        return tuple(cancelled)

    def _insert(self, action: Action) -> Action:
        if any(existing.action_id == action.action_id for existing in self._actions):
            raise LedgerError(f"Duplicate action id: {action.action_id}")
        self._actions.append(action)
        return action

    def _index(self, action_id: str) -> int:
        for index, action in enumerate(self._actions):
            if action.action_id == action_id:
                return index
        raise LedgerError(f"Unknown action: {action_id}")
