"""Validation helpers for wizard input.

Every validator returns ``None`` when the value is acceptable and an error
description otherwise. The back signal is always accepted so that a
validator can never block navigation.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from commitwiz.config import WizardConfig
from commitwiz.core.prompts import Signal

Validator = Callable[[Any], Optional[str]]


def normalize_answer(value: Any) -> Any:
    """Trim text answers; a blank string becomes empty. Other values pass through."""

    if isinstance(value, str):
        return value.strip()
    return value


def validate_ticket_number(value: Any, config: WizardConfig) -> Optional[str]:
    if value is Signal.BACK:
        return None
    if not value:
        if config.is_ticket_number_required and not config.fallback_ticket_number:
            return "Ticket number is required"
        return None
    pattern = config.ticket_pattern
    if pattern is not None and not pattern.search(str(value)):
        return f"Must match pattern: {config.ticket_number_regexp}"
    return None


def validate_subject(value: Any, config: WizardConfig) -> Optional[str]:
    if value is Signal.BACK:
        return None
    if not value:
        return "Subject is required"
    length = len(str(value))
    if length > config.subject_limit:
        return f"Exceeds {config.subject_limit} chars (current: {length})"
    return None


_VALIDATORS = {
    "ticketNumber": validate_ticket_number,
    "subject": validate_subject,
}


def make_validator(config: WizardConfig, field: str) -> Optional[Validator]:
    """Bind the validator for ``field`` to ``config``; ``None`` if the field is free-form."""

    rule = _VALIDATORS.get(field)
    if rule is None:
        return None

    def validate(value: Any) -> Optional[str]:
        return rule(value, config)

    return validate


__all__ = [
    "Validator",
    "normalize_answer",
    "validate_ticket_number",
    "validate_subject",
    "make_validator",
]
