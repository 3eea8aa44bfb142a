"""Coordinates the step table, the sequencer and post-processing for one run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from commitwiz.config import WizardConfig, get_settings
from commitwiz.core.post_processor import finalize_answers
from commitwiz.core.prompts import PromptProvider
from commitwiz.core.sequencer import FlowSequencer
from commitwiz.core.sources import RecentAnswerSource
from commitwiz.core.steps import build_steps
from commitwiz.errors import CancellationError
from commitwiz.utils.logger import logger


@dataclass
class FlowOutcome:
    answers: Optional[Dict[str, Any]]
    cancelled: bool = False
    reason: Optional[str] = None

    @property
    def completed(self) -> bool:
        return not self.cancelled


def run_questions(
    config: WizardConfig,
    provider: PromptProvider,
    sources: Optional[RecentAnswerSource] = None,
    recent_limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Ask the commit questions and return the finalized answers.

    Raises :class:`CancellationError` when the user aborts.
    """

    if recent_limit is None:
        recent_limit = get_settings().recent_limit
    steps = build_steps(config, sources, recent_limit=recent_limit)
    raw = FlowSequencer(steps, provider).run()
    return finalize_answers(raw, [step.name for step in steps], config.upper_case_subject)


def collect_answers(
    config: WizardConfig,
    provider: PromptProvider,
    sources: Optional[RecentAnswerSource] = None,
    recent_limit: Optional[int] = None,
) -> FlowOutcome:
    """Like :func:`run_questions`, but reports cancellation as an outcome."""

    try:
        answers = run_questions(config, provider, sources, recent_limit)
    except CancellationError as exc:
        logger.info("Commit questions cancelled: {}", exc.message)
        return FlowOutcome(answers=None, cancelled=True, reason=exc.message)

    logger.info("Collected answers for {} questions", sum(1 for value in answers.values() if value))
    return FlowOutcome(answers=answers)


__all__ = ["FlowOutcome", "run_questions", "collect_answers"]
