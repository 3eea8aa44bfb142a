"""Final normalization of a completed answer set."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Mapping

from commitwiz.utils.state import step_default


def apply_subject_case(subject: str, upper_case: bool) -> str:
    """Capitalize or lower-case the first character only."""

    if not subject:
        return subject
    first = subject[0].upper() if upper_case else subject[0].lower()
    return first + subject[1:]


def plain_value(value: Any) -> Any:
    """Replace menu markers such as ``Choice.CUSTOM`` with their string value."""

    if isinstance(value, Enum):
        return value.value
    return value


def fill_defaults(answers: Mapping[str, Any], step_names: Iterable[str]) -> Dict[str, Any]:
    result = dict(answers)
    for name in step_names:
        if result.get(name) in (None, ""):
            result[name] = step_default(name)
    return result


def finalize_answers(answers: Mapping[str, Any], step_names: Iterable[str], upper_case_subject: bool) -> Dict[str, Any]:
    """Apply subject casing once, then give every unanswered step its empty default.

    The result only holds plain values so it can be serialized as is.
    """

    result = {name: plain_value(value) for name, value in answers.items()}
    if result.get("subject"):
        result["subject"] = apply_subject_case(str(result["subject"]), upper_case_subject)
    return fill_defaults(result, step_names)


__all__ = ["apply_subject_case", "plain_value", "fill_defaults", "finalize_answers"]
