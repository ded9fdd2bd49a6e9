"""Interview and incubation conversation as a pure state machine.

``ConversationMachine.respond`` reads a session and returns a ``Response``;
it never mutates the session. Field changes travel in ``Response.patch`` and a
requested pipeline step in ``Response.action_type``, both applied by the
engine.
"""

import re
from dataclasses import replace
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from token_math.amounts import format_usdc, parse_usdc

from .models import (
    ACTION_DESCRIPTIONS,
    ConversationStep,
    IncubationConfig,
    Response,
    SessionPatch,
)
from .pipeline import next_action, progress
from .session import Session
from .settings import IncubatorSettings
from .validation import (
    ConfigValidationError,
    parse_identity_name,
    parse_treasury_amount,
    parse_vesting_months,
    suggest_slug,
)

_CONFIRM = frozenset({"confirm", "yes"})
_ADVANCE = frozenset({"continue", "next", "launch", "start"})
_STATUS = frozenset({"status", "progress"})
_RESET = frozenset({"reset", "cancel"})

_CHANGE_TARGETS: Dict[str, ConversationStep] = {
    "identity": ConversationStep.ASK_IDENTITY_NAME,
    "name": ConversationStep.ASK_IDENTITY_NAME,
    "ens": ConversationStep.ASK_IDENTITY_NAME,
    "treasury": ConversationStep.ASK_TREASURY_AMOUNT,
    "amount": ConversationStep.ASK_TREASURY_AMOUNT,
    "vesting": ConversationStep.ASK_VESTING_PERIOD,
    "period": ConversationStep.ASK_VESTING_PERIOD,
}

_INCUBATING_SUGGESTIONS = ("Continue", "Show status", "Cancel")


class ConversationMachine:
    def __init__(
        self,
        settings: Optional[IncubatorSettings] = None,
        identity_available: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self._settings = settings or IncubatorSettings()
        self._identity_available = identity_available

    def greeting(self, session: Session) -> Response:
        return Response(
            message=(
                f'Let\'s launch "{session.project_name}". First, choose your project '
                f"identity: yourname.{self._settings.parent_domain}\n\n"
                + self._identity_prompt()
            ),
            suggestions=_unique(("defi-hub", "nft-marketplace", suggest_slug(session.project_name))),
        )

    def respond(self, session: Session, text: str) -> Response:
        handlers = {
            ConversationStep.ASK_IDENTITY_NAME: self._on_identity,
            ConversationStep.ASK_TREASURY_AMOUNT: self._on_treasury,
            ConversationStep.ASK_VESTING_PERIOD: self._on_vesting,
            ConversationStep.CONFIRM_CONFIG: self._on_confirm,
            ConversationStep.INCUBATING: self._on_incubating,
            ConversationStep.COMPLETED: self._on_completed,
        }
        return handlers[session.step](session, text)

    def _on_identity(self, session: Session, text: str) -> Response:
        try:
            label = parse_identity_name(text, self._settings.parent_domain)
        except ConfigValidationError as exc:
            return Response(message=f"{exc}\n\n{self._identity_prompt()}")

        full_name = f"{label}.{self._settings.parent_domain}"
        if self._identity_available is not None and not self._identity_available(full_name):
            return Response(
                message=f"{full_name} is already taken.\n\n{self._identity_prompt()}"
            )

        return self._advance(
            session,
            replace(session.config, identity_name=label),
            f"{full_name} is available.\n\n{self._treasury_prompt()}",
            ("10000", "50000", "100000"),
        )

    def _on_treasury(self, session: Session, text: str) -> Response:
        try:
            amount = parse_treasury_amount(
                text, self._settings.treasury_min, self._settings.treasury_max
            )
        except ConfigValidationError as exc:
            return Response(message=f"{exc}\n\n{self._treasury_prompt()}")

        return self._advance(
            session,
            replace(session.config, treasury_amount=amount),
            f"Treasury set to {format_usdc(amount)}.\n\n{self._vesting_prompt()}",
            ("12 months", "24 months", "36 months"),
        )

    def _on_vesting(self, session: Session, text: str) -> Response:
        try:
            months = parse_vesting_months(
                text, self._settings.vesting_min_months, self._settings.vesting_max_months
            )
        except ConfigValidationError as exc:
            return Response(message=f"{exc}\n\n{self._vesting_prompt()}")

        config = replace(
            session.config,
            vesting_months=months,
            liquidity_percent=session.config.liquidity_percent or self._settings.liquidity_percent,
        )
        return Response(
            message=self._summary(config),
            suggestions=("Confirm", "Change identity", "Change treasury", "Change vesting"),
            patch=SessionPatch(config=config, step=ConversationStep.CONFIRM_CONFIG),
        )

    def _on_confirm(self, session: Session, text: str) -> Response:
        words = _words(text)
        if "change" in words:
            for word, step in _CHANGE_TARGETS.items():
                if word in words:
                    return Response(
                        message=self._prompt_for(step),
                        patch=SessionPatch(step=step),
                    )
            return Response(
                message="What would you like to change: identity, treasury or vesting?",
                suggestions=("Change identity", "Change treasury", "Change vesting"),
            )
        if words & _CONFIRM:
            return Response(
                message=(
                    "Configuration confirmed:\n\n"
                    f"{self._config_lines(session.config)}\n\n"
                    f'"{session.project_name}" is now in screening. '
                    'Type "continue" to run the first incubation step.'
                ),
                suggestions=("Continue", "Show status"),
                patch=SessionPatch(step=ConversationStep.INCUBATING),
            )
        return Response(
            message=self._summary(session.config),
            suggestions=("Confirm", "Change identity", "Change treasury", "Change vesting"),
        )

    def _on_incubating(self, session: Session, text: str) -> Response:
        words = _words(text)
        if words & _RESET:
            return Response(
                message=(
                    "Cleared pending steps. Completed steps are kept.\n\n"
                    'Type "continue" to resume.'
                ),
                suggestions=("Continue", "Show status"),
                patch=SessionPatch(cancel_in_flight=True),
            )
        if words & _STATUS:
            return Response(message=self._status(session), suggestions=("Continue", "View details"))
        if words & _ADVANCE:
            in_flight = session.ledger.in_flight()
            if in_flight is not None:
                return Response(
                    message=(
                        f"Still waiting on: {in_flight.description} ({in_flight.status.value}).\n\n"
                        'Confirm or fail it first, or type "reset" to cancel it.'
                    ),
                    suggestions=("Show status", "Reset"),
                )
            upcoming = next_action(session.ledger.completed_types())
            if upcoming is None:
                return Response(
                    message=self._launched(session),
                    suggestions=("View project", "Start new project"),
                    patch=SessionPatch(step=ConversationStep.COMPLETED),
                )
            return Response(
                message=f"Next step: {ACTION_DESCRIPTIONS[upcoming]}.",
                suggestions=_INCUBATING_SUGGESTIONS,
                action_type=upcoming,
            )
        return Response(
            message=f'How can I help with "{session.project_name}"? '
            'Type "continue", "status" or "reset".',
            suggestions=_INCUBATING_SUGGESTIONS,
        )

    def _on_completed(self, session: Session, text: str) -> Response:
        if _words(text) & _STATUS:
            return Response(message=self._status(session), suggestions=("View project",))
        return Response(
            message=self._launched(session),
            suggestions=("View project", "Start new project"),
        )

    def _advance(
        self,
        session: Session,
        config: IncubationConfig,
        message: str,
        suggestions: Tuple[str, ...],
    ) -> Response:
        # Backtracking from confirmation returns to the summary once the field is fixed.
        if _is_complete(config) and session.config.vesting_months is not None:
            return Response(
                message=self._summary(config),
                suggestions=("Confirm", "Change identity", "Change treasury", "Change vesting"),
                patch=SessionPatch(config=config, step=ConversationStep.CONFIRM_CONFIG),
            )
        return Response(
            message=message,
            suggestions=suggestions,
            patch=SessionPatch(config=config, step=_following(session.step)),
        )

    def _summary(self, config: IncubationConfig) -> str:
        return (
            "Please confirm your configuration:\n\n"
            f"{self._config_lines(config)}\n\n"
            'Type "confirm" to begin, or "change identity", "change treasury" '
            'or "change vesting".'
        )

    def _config_lines(self, config: IncubationConfig) -> str:
        return (
            f"Identity: {config.identity_name}.{self._settings.parent_domain}\n"
            f"Treasury: {format_usdc(config.treasury_amount)}\n"
            f"Vesting: {config.vesting_months} months"
        )

    def _status(self, session: Session) -> str:
        done, total = progress(session.ledger.completed_types())
        upcoming = next_action(session.ledger.completed_types())
        lines = [
            f'Project "{session.project_name}" progress: {done}/{total} steps completed.',
            f"Stage: {session.stage.value.capitalize()}",
        ]
        in_flight = session.ledger.in_flight()
        if in_flight is not None:
            lines.append(f"In flight: {in_flight.description} ({in_flight.status.value})")
        elif upcoming is not None:
            lines.append(f"Next: {ACTION_DESCRIPTIONS[upcoming]}")
        return "\n".join(lines)

    def _launched(self, session: Session) -> str:
        return (
            f'Congratulations! "{session.project_name}" has completed incubation '
            "and is now launched."
        )

    def _prompt_for(self, step: ConversationStep) -> str:
        prompts = {
            ConversationStep.ASK_IDENTITY_NAME: self._identity_prompt,
            ConversationStep.ASK_TREASURY_AMOUNT: self._treasury_prompt,
            ConversationStep.ASK_VESTING_PERIOD: self._vesting_prompt,
        }
        return prompts[step]()

    def _identity_prompt(self) -> str:
        return "Enter the name you want (lowercase letters, numbers and hyphens, 3-32 chars):"

    def _treasury_prompt(self) -> str:
        low = format_usdc(parse_usdc(self._settings.treasury_min))
        high = format_usdc(parse_usdc(self._settings.treasury_max))
        return f"How much USDC should the treasury hold? ({low} to {high})"

    def _vesting_prompt(self) -> str:
        return (
            "How long should founder tokens vest? "
            f"({self._settings.vesting_min_months} to {self._settings.vesting_max_months} months)"
        )


def _following(step: ConversationStep) -> ConversationStep:
    order = (
        ConversationStep.ASK_IDENTITY_NAME,
        ConversationStep.ASK_TREASURY_AMOUNT,
        ConversationStep.ASK_VESTING_PERIOD,
        ConversationStep.CONFIRM_CONFIG,
    )
    return order[order.index(step) + 1]


def _is_complete(config: IncubationConfig) -> bool:
    return None not in (config.identity_name, config.treasury_amount, config.vesting_months)


def _words(text: str) -> FrozenSet[str]:
    return frozenset(re.findall(r"[a-z]+", text.lower()))


def _unique(values: Tuple[str, ...]) -> Tuple[str, ...]:
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)
