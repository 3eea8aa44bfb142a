"""Interactive commit message questions with back navigation."""

from commitwiz.config import CommitType, WizardConfig, load_wizard_config
from commitwiz.core.orchestrator import FlowOutcome, collect_answers, run_questions
from commitwiz.core.prompts import PromptKind, PromptOption, PromptRequest, Signal
from commitwiz.core.sequencer import FlowSequencer, FlowState
from commitwiz.core.sources import NullAnswerSource, StaticAnswerSource
from commitwiz.core.steps import Choice, Step, build_steps
from commitwiz.errors import CancellationError, ConfigError, WizardError

__version__ = "0.1.0"

__all__ = [
    "CommitType",
    "WizardConfig",
    "load_wizard_config",
    "FlowOutcome",
    "collect_answers",
    "run_questions",
    "PromptKind",
    "PromptOption",
    "PromptRequest",
    "Signal",
    "FlowSequencer",
    "FlowState",
    "NullAnswerSource",
    "StaticAnswerSource",
    "Choice",
    "Step",
    "build_steps",
    "CancellationError",
    "ConfigError",
    "WizardError",
]
