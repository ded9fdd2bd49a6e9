"""Fixed incubation pipeline and stage derivation."""

from typing import Iterable, Optional, Tuple, Union

from .models import ActionType, Stage

INCUBATION_FLOW: Tuple[ActionType, ...] = (
    ActionType.MINT_IDENTITY,
    ActionType.SETUP_TREASURY,
    ActionType.OPEN_CHANNEL,
    ActionType.APPROVE_BUDGET,
    ActionType.DEPLOY_POOL,
    ActionType.LOCK_LIQUIDITY,
)


def next_action(completed: Iterable[Union[ActionType, str]]) -> Optional[ActionType]:
    """First flow entry not yet completed.

    Depends only on membership, never on the order actions completed in, so
    the answer can be recomputed from the ledger after any interruption.
    """

    done = {ActionType(value) for value in completed}
    for action_type in INCUBATION_FLOW:
        if action_type not in done:
            return action_type
    return None


def stage_for(completed_count: int) -> Stage:
    if isinstance(completed_count, bool) or not isinstance(completed_count, int):
        raise ValueError("Completed count must be an integer.")
    if completed_count < 0:
        raise ValueError("Completed count cannot be negative.")
    if completed_count == 0:
        return Stage.APPLIED
    if completed_count <= 2:
        return Stage.SCREENING
    if completed_count <= 4:
        return Stage.INCUBATING
    if completed_count == 5:
        return Stage.LAUNCHING
    return Stage.LAUNCHED


def session_stage(completed_count: int, confirmed: bool) -> Stage:
    """Stage of a session; a confirmed configuration is at least screening."""

    stage = stage_for(completed_count)
    if confirmed and stage.rank < Stage.SCREENING.rank:
        return Stage.SCREENING
    return stage


def progress(completed: Iterable[ActionType]) -> Tuple[int, int]:
    done = set(completed)
    return sum(1 for action_type in INCUBATION_FLOW if action_type in done), len(INCUBATION_FLOW)
