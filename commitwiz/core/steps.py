"""Step definition table for the commit questions.

The table is built once per run from a frozen :class:`WizardConfig`. Each
step carries a pure inclusion condition over a read-only snapshot of the
answers given so far, and a prompt builder that talks to the provider and
returns a tagged :data:`StepResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from commitwiz.config import WizardConfig
from commitwiz.core.prompts import (
    BACK_OPTION,
    PromptKind,
    PromptOption,
    PromptProvider,
    PromptRequest,
    StepResult,
    Value,
    classify_response,
)
from commitwiz.core.sources import NullAnswerSource, RecentAnswerSource
from commitwiz.utils.logger import logger
from commitwiz.utils.scopes import categorize_scopes
from commitwiz.utils.templates import expand_template, extract_issue_from_branch, format_issue_reference
from commitwiz.utils.validators import Validator, make_validator, normalize_answer

Answers = Mapping[str, Any]
Condition = Callable[[Answers], bool]
PromptBuilder = Callable[[PromptProvider, Answers, Optional[str]], StepResult]

WIP_TYPE = "wip"
RECENT_LABEL_WIDTH = 60


class Choice(Enum):
    """Menu entries that ask for free text instead of picking a listed value."""

    CUSTOM = "custom"


@dataclass(frozen=True)
class Step:
    name: str
    prompt: PromptBuilder
    condition: Optional[Condition] = None
    validator: Optional[Validator] = None

    def is_included(self, answers: Answers) -> bool:
        return self.condition is None or bool(self.condition(answers))


def _ask(provider: PromptProvider, request: PromptRequest) -> StepResult:
    return classify_response(provider.ask(request))


class _StepFactory:
    def __init__(self, config: WizardConfig, sources: RecentAnswerSource, recent_limit: int):
        self.config = config
        self.sources = sources
        self.recent_limit = recent_limit
        self.categories: Dict[str, List[str]] = categorize_scopes(config.effective_scopes)
        self.ticket_validator = make_validator(config, "ticketNumber")
        self.subject_validator = make_validator(config, "subject")

    def build(self) -> Tuple[Step, ...]:
        steps = [
            Step("type", self.prompt_type),
            Step("scopeCategory", self.prompt_scope_category, self.has_scope_categories),
            Step("scope", self.prompt_scope, self.has_scope_category_answer),
            Step(
                "ticketNumber",
                self.prompt_ticket_number,
                lambda answers: self.config.allow_ticket_number,
                self.ticket_validator,
            ),
            Step("subject", self.prompt_subject, validator=self.subject_validator),
            Step("body", self.prompt_body),
            Step("breaking", self.prompt_breaking, self.allows_breaking_change),
            Step("footer", self.prompt_footer, lambda answers: answers.get("type") != WIP_TYPE),
        ]
        return tuple(self._apply_skip_list(step) for step in steps)

    def _apply_skip_list(self, step: Step) -> Step:
        if step.name not in self.config.skip_questions:
            return step
        return Step(step.name, step.prompt, lambda answers: False, step.validator)

    # conditions

    def has_scope_categories(self, answers: Answers) -> bool:
        return bool(self.categories) and answers.get("type") != WIP_TYPE

    def has_scope_category_answer(self, answers: Answers) -> bool:
        return bool(answers.get("scopeCategory"))

    def allows_breaking_change(self, answers: Answers) -> bool:
        if self.config.ask_for_breaking_change_first:
            return True
        return answers.get("type") in self.config.allow_breaking_changes

    # prompts

    def prompt_type(self, provider: PromptProvider, answers: Answers, error: Optional[str]) -> StepResult:
        options = tuple(
            PromptOption(value=commit_type.value, label=commit_type.label, hint=commit_type.value)
            for commit_type in self.config.types
        )
        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.SELECT,
                message="Select commit type:",
                options=options + (PromptOption(BACK_OPTION.value, BACK_OPTION.label, "Return to start"),),
                error=error,
                step="type",
            ),
        )

    def prompt_scope_category(
        self, provider: PromptProvider, answers: Answers, error: Optional[str]
    ) -> StepResult:
        options = tuple(
            PromptOption(value=category, label=category, hint=f"{len(scopes)} scopes")
            for category, scopes in self.categories.items()
        )
        extras = (
            PromptOption(value=None, label="No scope"),
            PromptOption(value=Choice.CUSTOM, label="Custom scope"),
            BACK_OPTION,
        )
        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.SELECT,
                message="Select scope category:",
                options=options + extras,
                error=error,
                step="scopeCategory",
            ),
        )

    def prompt_scope(self, provider: PromptProvider, answers: Answers, error: Optional[str]) -> StepResult:
        category = answers.get("scopeCategory")
        if category is Choice.CUSTOM:
            return _ask(
                provider,
                PromptRequest(
                    kind=PromptKind.TEXT,
                    message="Enter custom scope:",
                    placeholder="e.g., auth, api, ui",
                    error=error,
                    step="scope",
                ),
            )

        options = tuple(PromptOption(value=name, label=name) for name in self.categories.get(category, []))
        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.SELECT,
                message="Select scope:",
                options=options + (BACK_OPTION,),
                error=error,
                step="scope",
            ),
        )

    def prompt_ticket_number(
        self, provider: PromptProvider, answers: Answers, error: Optional[str]
    ) -> StepResult:
        result = _ask(
            provider,
            PromptRequest(
                kind=PromptKind.TEXT,
                message="Ticket number:",
                placeholder=self.config.ticket_number_prefix,
                default=self.config.fallback_ticket_number,
                validate=self.ticket_validator,
                error=error,
                step="ticketNumber",
            ),
        )
        # An empty submission takes the fallback.
        fallback = self.config.fallback_ticket_number
        if fallback and isinstance(result, Value) and not normalize_answer(result.value):
            return Value(fallback)
        return result

    def prompt_subject(self, provider: PromptProvider, answers: Answers, error: Optional[str]) -> StepResult:
        # A validation retry goes straight back to typing; a fresh visit restarts the sub-flow.
        if error is None:
            for offer in (self._offer_template, self._offer_recent):
                result = offer(provider)
                if result is None:
                    continue
                if isinstance(result, Value) and result.value is Choice.CUSTOM:
                    break
                return result

        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.TEXT,
                message="Commit message:",
                placeholder="add user authentication",
                default=self._prepared_subject(),
                validate=self.subject_validator,
                error=error,
                step="subject",
            ),
        )

    def _offer_template(self, provider: PromptProvider) -> Optional[StepResult]:
        templates = self.sources.list_templates()
        if not templates:
            return None

        accepted = _ask(
            provider,
            PromptRequest(kind=PromptKind.CONFIRM, message="Use commit template?", default=False, step="subject"),
        )
        if not isinstance(accepted, Value):
            return accepted
        if not accepted.value:
            return None

        options = tuple(PromptOption(value=name, label=name) for name in templates)
        selected = _ask(
            provider,
            PromptRequest(
                kind=PromptKind.SELECT,
                message="Select template:",
                options=options + (PromptOption(Choice.CUSTOM, "Enter custom message"), BACK_OPTION),
                step="subject",
            ),
        )
        if not isinstance(selected, Value) or selected.value is Choice.CUSTOM:
            return selected

        template = self.sources.load_template(selected.value) if selected.value else None
        if template is None:
            logger.warning("Template {!r} could not be loaded, asking for a message instead", selected.value)
            return Value(Choice.CUSTOM)

        logger.debug("Using template {!r}", selected.value)
        return Value(expand_template(template, branch=self.sources.current_branch()))

    def _offer_recent(self, provider: PromptProvider) -> Optional[StepResult]:
        messages = self.sources.recent_messages(self.recent_limit) if self.recent_limit else []
        if not messages:
            return None

        accepted = _ask(
            provider,
            PromptRequest(
                kind=PromptKind.CONFIRM, message="Use recent commit message?", default=False, step="subject"
            ),
        )
        if not isinstance(accepted, Value):
            return accepted
        if not accepted.value:
            return None

        options = tuple(
            PromptOption(value=message, label=f"#{index} {_shorten(message)}", hint="recent commit")
            for index, message in enumerate(messages, start=1)
        )
        selected = _ask(
            provider,
            PromptRequest(
                kind=PromptKind.SELECT,
                message="Select recent commit message:",
                options=options + (PromptOption(Choice.CUSTOM, "Enter custom message"), BACK_OPTION),
                step="subject",
            ),
        )
        if isinstance(selected, Value) and not selected.value:
            return Value(Choice.CUSTOM)
        return selected

    def _prepared_subject(self) -> str:
        if not self.config.use_prepared_commit:
            return ""
        previous = self.sources.previous_commit()
        return previous[0] if previous else ""

    def prompt_body(self, provider: PromptProvider, answers: Answers, error: Optional[str]) -> StepResult:
        default = ""
        if self.config.use_prepared_commit:
            previous = self.sources.previous_commit()
            if len(previous) > 1:
                default = "|".join(previous[1:])

        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.TEXT,
                message="Extended description (optional):",
                placeholder='Use "|" for new lines',
                default=default,
                error=error,
                step="body",
            ),
        )

    def prompt_breaking(self, provider: PromptProvider, answers: Answers, error: Optional[str]) -> StepResult:
        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.TEXT,
                message="Breaking changes (optional):",
                placeholder="Describe breaking changes",
                error=error,
                step="breaking",
            ),
        )

    def prompt_footer(self, provider: PromptProvider, answers: Answers, error: Optional[str]) -> StepResult:
        issue = extract_issue_from_branch(self.sources.current_branch())
        return _ask(
            provider,
            PromptRequest(
                kind=PromptKind.TEXT,
                message="Issues closed (optional):",
                placeholder=f"{format_issue_reference(issue)} (from branch)" if issue else "#31, #34",
                default=format_issue_reference(issue) if issue else "",
                error=error,
                step="footer",
            ),
        )


def _shorten(message: str) -> str:
    if len(message) <= RECENT_LABEL_WIDTH:
        return message
    return f"{message[:RECENT_LABEL_WIDTH]}..."


def build_steps(
    config: WizardConfig,
    sources: Optional[RecentAnswerSource] = None,
    recent_limit: int = 5,
) -> Tuple[Step, ...]:
    """Return the ordered, immutable step table for ``config``."""

    return _StepFactory(config, sources or NullAnswerSource(), recent_limit).build()


__all__ = ["Step", "Choice", "build_steps", "WIP_TYPE"]
