"""Finite-state sequencer that walks the step table with back navigation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from commitwiz.core.prompts import Back, Cancel, PromptProvider, Value
from commitwiz.core.steps import Step
from commitwiz.errors import CancellationError
from commitwiz.utils.logger import logger
from commitwiz.utils.state import AnswerStore
from commitwiz.utils.validators import normalize_answer


class FlowState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


class FlowSequencer:
    """Drives one run of the questions against its own answer store.

    Conditions are re-evaluated lazily at every visit because going back
    can rewrite the answers they depend on. The only exception that
    leaves :meth:`run` on purpose is :class:`CancellationError`; anything
    the provider raises propagates untouched.
    """

    def __init__(self, steps: Sequence[Step], provider: PromptProvider):
        self.steps = tuple(steps)
        self.provider = provider
        self.store = AnswerStore()
        self.cursor = 0
        self.state = FlowState.RUNNING
        self._pending_error: Optional[str] = None

    @property
    def answers(self) -> Mapping[str, Any]:
        return self.store.snapshot()

    @property
    def history(self) -> List[str]:
        return list(self.store.history)

    @property
    def pending_error(self) -> Optional[str]:
        return self._pending_error

    def is_complete(self) -> bool:
        return self.cursor >= len(self.steps)

    def run(self) -> Dict[str, Any]:
        """Ask every included step and return the raw answers in presentation order."""

        if self.state is not FlowState.RUNNING:
            raise RuntimeError(f"sequencer already {self.state.value}; build a new one per run")

        while not self.is_complete():
            self.step_once()

        self.state = FlowState.COMPLETED
        logger.debug("Flow completed with answers for {}", ", ".join(self.store.history) or "nothing")
        return self.store.as_dict()

    def step_once(self) -> None:
        """Evaluate the step under the cursor: skip it, ask it, or navigate."""

        step = self.steps[self.cursor]
        answers = self.store.snapshot()

        if not step.is_included(answers):
            logger.debug("Skipping step {}", step.name)
            self.cursor += 1
            return

        error, self._pending_error = self._pending_error, None
        logger.debug("Presenting step {} (cursor={})", step.name, self.cursor)
        result = step.prompt(self.provider, answers, error)

        if isinstance(result, Cancel):
            self._cancel("Operation cancelled by user")
        if isinstance(result, Back):
            self._go_back()
            return
        if not isinstance(result, Value):
            raise TypeError(f"step {step.name!r} returned {type(result).__name__}, expected a step result")

        value = normalize_answer(result.value)
        if step.validator is not None:
            message = step.validator(value)
            if message:
                logger.debug("Validation failed for {}: {}", step.name, message)
                self._pending_error = message
                return

        if not _is_empty(value):
            self.store.record(step.name, value)
        self.cursor += 1

    def previous_included_index(self) -> Optional[int]:
        """Index of the closest earlier step whose condition holds right now."""

        answers = self.store.snapshot()
        for index in range(self.cursor - 1, -1, -1):
            if self.steps[index].is_included(answers):
                return index
        return None

    def _go_back(self) -> None:
        target = self.previous_included_index()
        if target is None:
            self._cancel("Cancelled by going back from the first question")

        discarded = self.store.discard(step.name for step in self.steps[target:])
        logger.debug(
            "Back from {} to {}, discarded {}",
            self.steps[self.cursor].name,
            self.steps[target].name,
            discarded or "nothing",
        )
        self.cursor = target

    def _cancel(self, reason: str) -> None:
        self.state = FlowState.CANCELLED
        self.store.reset()
        self._pending_error = None
        raise CancellationError(reason)


__all__ = ["FlowSequencer", "FlowState"]
