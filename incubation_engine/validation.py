"""Parsing and validation of founder answers."""

import re
from decimal import Decimal, localcontext
from typing import Optional

from token_math.amounts import InvalidAmount, format_usdc, parse_usdc
from tx_adapter.evm.identity import label_problem


class ConfigValidationError(ValueError):
    """Raised when a founder answer cannot be accepted."""


_QUOTED = re.compile(r"[\"']([^\"']+)[\"']")
_CALLED = re.compile(r"(?:called|named)\s+(\w+)", re.IGNORECASE)
_PROJECT = re.compile(r"project\s+[\"']?(\w+)[\"']?", re.IGNORECASE)
_MONTHS = re.compile(r"(\d+(?:\.\d+)?)\s*(years?|yrs?|months?|mos?)?", re.IGNORECASE)


def extract_project_name(text: str) -> Optional[str]:
    for pattern in (_QUOTED, _CALLED, _PROJECT):
        match = pattern.search(text)
        if match:
            name = match.group(1).strip()
            if name:
                return name
    return None


def suggest_slug(project_name: str) -> str:
    slug = re.sub(r"[^a-z0-9-]+", "-", project_name.strip().lower()).strip("-")
    return re.sub(r"-{2,}", "-", slug)


def parse_identity_name(text: str, parent_domain: str) -> str:
    """Return the subdomain label; a full ``label.<parent>`` answer is accepted."""

    label = text.strip().lower()
    suffix = "." + parent_domain.lower()
    if label.endswith(suffix):
        label = label[: -len(suffix)]
    problem = label_problem(label)
    if problem:
        raise ConfigValidationError(problem)
    return label


def parse_treasury_amount(text: str, minimum: int, maximum: int) -> int:
    """Treasury answer in USDC base units, within ``[minimum, maximum]`` whole USDC."""

    try:
        amount = parse_usdc(text)
    except InvalidAmount as exc:
        raise ConfigValidationError("Please enter a valid amount, e.g. 10000.") from exc

    low = parse_usdc(minimum)
    high = parse_usdc(maximum)
    if amount < low:
        raise ConfigValidationError(f"Minimum treasury is {format_usdc(low)}.")
    if amount > high:
        raise ConfigValidationError(f"Maximum treasury is {format_usdc(high)}.")
    return amount


def parse_vesting_months(text: str, minimum: int = 6, maximum: int = 48) -> int:
    """Whole months from answers such as "12", "12 months" or "2 years"."""

    match = _MONTHS.search(text)
    if not match:
        raise ConfigValidationError("Please enter the vesting period in months, e.g. 12.")

    digits = match.group(1)
    unit = (match.group(2) or "").lower()
    with localcontext() as ctx:
        ctx.prec = len(digits) + 4
        number = Decimal(digits)
        if unit.startswith("y"):
            number *= 12
    if number != number.to_integral_value():
        raise ConfigValidationError("Vesting period must be a whole number of months.")
    if not minimum <= number <= maximum:
        raise ConfigValidationError(
            f"Vesting period must be between {minimum} and {maximum} months."
        )
    return int(number)
