"""Answer state for one run of the commit questions."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping

STEP_SEQUENCE: List[str] = [
    "type",
    "scopeCategory",
    "scope",
    "ticketNumber",
    "subject",
    "body",
    "breaking",
    "footer",
]

# ``default`` is what the final result carries for a step that produced no answer.
STEP_METADATA: Dict[str, Dict[str, Any]] = {
    "type": {"label": "Type", "default": None},
    "scopeCategory": {"label": "Scope category", "default": None},
    "scope": {"label": "Scope", "default": None},
    "ticketNumber": {"label": "Ticket", "default": ""},
    "subject": {"label": "Subject", "default": ""},
    "body": {"label": "Body", "default": ""},
    "breaking": {"label": "Breaking changes", "default": ""},
    "footer": {"label": "Issues closed", "default": ""},
}


def step_label(step_name: str) -> str:
    return STEP_METADATA.get(step_name, {}).get("label", step_name.title())


def step_default(step_name: str) -> Any:
    return STEP_METADATA.get(step_name, {}).get("default", "")


@dataclass
class AnswerStore:
    """Accepted answers in insertion order plus the names of the steps that produced them."""

    answers: Dict[str, Any] = field(default_factory=dict)
    history: List[str] = field(default_factory=list)

    def reset(self) -> None:
        self.answers.clear()
        self.history.clear()

    def record(self, step_name: str, value: Any) -> None:
        self.answers[step_name] = value
        if step_name not in self.history:
            self.history.append(step_name)

    def discard(self, step_names: Iterable[str]) -> List[str]:
        """Forget answers for ``step_names``; returns the names that were actually held."""

        targets = set(step_names)
        removed = [name for name in self.answers if name in targets]
        for name in removed:
            del self.answers[name]
        self.history = [name for name in self.history if name not in targets]
        return removed

    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy for condition and prompt functions."""
        return MappingProxyType(dict(self.answers))

    def get(self, step_name: str, default: Any = None) -> Any:
        return self.answers.get(step_name, default)

    def __contains__(self, step_name: object) -> bool:
        return step_name in self.answers

    def __len__(self) -> int:
        return len(self.answers)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.answers)


__all__ = [
    "AnswerStore",
    "STEP_SEQUENCE",
    "STEP_METADATA",
    "step_label",
    "step_default",
]
