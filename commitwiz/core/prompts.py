"""Prompt requests, navigation signals and the prompt provider contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple, Union


BACK_TOKEN = "__back__"


class Signal(Enum):
    """Control responses a prompt provider may return instead of an answer."""

    BACK = "back"
    CANCEL = "cancel"

    def __repr__(self) -> str:
        return f"Signal.{self.name}"


class PromptKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class PromptOption:
    value: Any
    label: str
    hint: Optional[str] = None


BACK_OPTION = PromptOption(value=Signal.BACK, label="← Previous Menu", hint="Previous question")


@dataclass(frozen=True)
class PromptRequest:
    """Everything a provider needs to render one question."""

    kind: PromptKind
    message: str
    options: Tuple[PromptOption, ...] = ()
    placeholder: Optional[str] = None
    default: Any = None
    validate: Optional[Callable[[Any], Optional[str]]] = field(default=None, compare=False)
    error: Optional[str] = None
    step: Optional[str] = None


class PromptProvider(Protocol):
    """Renders a request and blocks until the user answers.

    Returns the chosen option value or typed text, ``True``/``False`` for
    confirms, ``Signal.BACK`` or ``Signal.CANCEL``.
    """

    def ask(self, request: PromptRequest) -> Any:
        ...


@dataclass(frozen=True)
class Value:
    value: Any


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


StepResult = Union[Value, Back, Cancel]


def is_cancel(response: Any) -> bool:
    return response is Signal.CANCEL or isinstance(response, Cancel)


def is_back(response: Any) -> bool:
    if response is Signal.BACK or isinstance(response, Back):
        return True
    # Text prompts have no menu, so providers may pass the reserved token through.
    return isinstance(response, str) and response.strip() == BACK_TOKEN


def classify_response(response: Any) -> StepResult:
    """Turn a raw provider response into a tagged step result."""

    if isinstance(response, (Value, Back, Cancel)):
        return response
    if is_cancel(response):
        return Cancel()
    if is_back(response):
        return Back()
    return Value(response)


__all__ = [
    "BACK_TOKEN",
    "BACK_OPTION",
    "Signal",
    "PromptKind",
    "PromptOption",
    "PromptRequest",
    "PromptProvider",
    "Value",
    "Back",
    "Cancel",
    "StepResult",
    "is_cancel",
    "is_back",
    "classify_response",
]
