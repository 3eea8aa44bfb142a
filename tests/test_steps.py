"""Tests for the step table: conditions, prompt requests and the subject sub-flow."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from commitwiz.config import WizardConfig
from commitwiz.core.prompts import PromptKind, Signal
from commitwiz.core.sequencer import FlowSequencer
from commitwiz.core.sources import StaticAnswerSource
from commitwiz.core.steps import Choice, build_steps
from commitwiz.errors import CancellationError


def _names(steps):
    return [step.name for step in steps]


def _config(**extra) -> WizardConfig:
    return WizardConfig.from_mapping({"types": [{"value": "feat", "name": "Feature"}, {"value": "wip"}], **extra})


class TestStepTable:
    def test_presentation_order(self, types_config):
        assert _names(build_steps(types_config)) == [
            "type",
            "scopeCategory",
            "scope",
            "ticketNumber",
            "subject",
            "body",
            "breaking",
            "footer",
        ]

    def test_steps_are_immutable(self, types_config):
        step = build_steps(types_config)[0]
        with pytest.raises(FrozenInstanceError):
            step.name = "other"

    def test_wip_skips_scope_and_footer(self, scoped_config):
        included = [step.name for step in build_steps(scoped_config) if step.is_included({"type": "wip"})]
        assert included == ["type", "subject", "body"]

    def test_breaking_follows_allow_list(self, scoped_config):
        breaking = {step.name: step for step in build_steps(scoped_config)}["breaking"]
        assert breaking.is_included({"type": "feat"})
        assert not breaking.is_included({"type": "docs"})

    def test_breaking_first_includes_it_for_every_type(self):
        breaking = {step.name: step for step in build_steps(_config(askForBreakingChangeFirst=True))}["breaking"]
        assert breaking.is_included({"type": "wip"})

    def test_skip_questions_excludes_any_optional_step(self):
        steps = build_steps(_config(skipQuestions=["body", "footer", "ticketNumber"], allowTicketNumber=True))
        included = [step.name for step in steps if step.is_included({"type": "feat"})]
        assert included == ["type", "subject"]

    def test_scope_category_needs_configured_scopes(self, types_config):
        scope_category = build_steps(types_config)[1]
        assert not scope_category.is_included({"type": "feat"})


class TestPromptRequests:
    def test_type_menu_lists_types_and_back(self, scripted, types_config):
        provider = scripted(Signal.CANCEL)
        with pytest.raises(CancellationError):
            FlowSequencer(build_steps(types_config), provider).run()

        request = provider.requests[0]
        assert request.kind is PromptKind.SELECT
        assert [option.value for option in request.options] == ["feat", "fix", "docs", "wip", Signal.BACK]
        assert request.options[0].label == "Feature"

    def test_scope_category_menu(self, scripted, scoped_config):
        provider = scripted("feat", Signal.CANCEL)
        with pytest.raises(CancellationError):
            FlowSequencer(build_steps(scoped_config), provider).run()

        options = provider.requests[1].options
        assert [option.label for option in options] == [
            "UI & Components",
            "Data & API",
            "Other",
            "No scope",
            "Custom scope",
            "← Previous Menu",
        ]
        assert options[1].hint == "2 scopes"
        assert options[3].value is None
        assert options[4].value is Choice.CUSTOM

    def test_scope_menu_lists_category_scopes(self, scripted, scoped_config):
        provider = scripted("feat", "Data & API", "auth", "add login", "", "", "")
        answers = FlowSequencer(build_steps(scoped_config), provider).run()

        assert [option.value for option in provider.requests[2].options] == ["api", "auth", Signal.BACK]
        assert answers["scope"] == "auth"

    def test_ticket_prompt_uses_prefix_and_fallback(self, scripted):
        config = _config(allowTicketNumber=True, ticketNumberPrefix="JIRA-", fallbackTicketNumber="JIRA-0")
        provider = scripted("feat", "", "add x", "", "")
        answers = FlowSequencer(build_steps(config), provider).run()

        ticket = provider.requests[1]
        assert ticket.placeholder == "JIRA-"
        assert ticket.default == "JIRA-0"
        assert ticket.validate("") is None
        assert answers["ticketNumber"] == "JIRA-0"

    def test_prepared_commit_prefills_subject_and_body(self, scripted):
        sources = StaticAnswerSource(previous=["add x", "first line", "second line"])
        provider = scripted("feat", "add x", "", "")
        FlowSequencer(build_steps(_config(usePreparedCommit=True), sources), provider).run()

        assert provider.requests[1].default == "add x"
        assert provider.requests[2].default == "first line|second line"

    def test_footer_default_comes_from_branch(self, scripted):
        sources = StaticAnswerSource(branch="feature/42-login")
        provider = scripted("feat", "add x", "", "#42")
        answers = FlowSequencer(build_steps(_config(), sources), provider).run()

        footer = provider.requests[-1]
        assert footer.default == "#42"
        assert footer.placeholder == "#42 (from branch)"
        assert answers["footer"] == "#42"


class TestSubjectSubFlow:
    def test_template_is_expanded(self, scripted):
        sources = StaticAnswerSource(templates={"release": "release {branch}"}, branch="main")
        provider = scripted("feat", True, "release", "", "")
        answers = FlowSequencer(build_steps(_config(), sources), provider).run()

        assert provider.messages[1:3] == ["Use commit template?", "Select template:"]
        assert answers["subject"] == "release main"

    def test_template_date_placeholder(self, scripted):
        sources = StaticAnswerSource(templates={"daily": "sync {date}"})
        provider = scripted("feat", True, "daily", "", "")
        answers = FlowSequencer(build_steps(_config(), sources), provider).run()

        assert answers["subject"].startswith("sync ")
        datetime.strptime(answers["subject"][5:], "%Y-%m-%d")

    def test_declined_template_falls_through_to_text(self, scripted):
        sources = StaticAnswerSource(templates={"release": "release"})
        provider = scripted("feat", False, "add x", "", "")
        answers = FlowSequencer(build_steps(_config(), sources), provider).run()

        assert provider.requests[2].kind is PromptKind.TEXT
        assert answers["subject"] == "add x"

    def test_custom_message_skips_recent_offer(self, scripted):
        sources = StaticAnswerSource(templates={"release": "release"}, recent=["fix login"])
        provider = scripted("feat", True, Choice.CUSTOM, "add x", "", "")
        FlowSequencer(build_steps(_config(), sources), provider).run()

        assert provider.messages[1:4] == ["Use commit template?", "Select template:", "Commit message:"]

    def test_back_inside_template_menu_leaves_the_step(self, scripted):
        sources = StaticAnswerSource(templates={"release": "release"})
        provider = scripted("feat", True, Signal.BACK, "feat", False, "add x", "", "")
        answers = FlowSequencer(build_steps(_config(), sources), provider).run()

        assert provider.asked[:4] == ["type", "subject", "subject", "type"]
        # re-entering the step starts the sub-flow over
        assert provider.messages[4] == "Use commit template?"
        assert answers["subject"] == "add x"

    def test_recent_message_is_offered(self, scripted):
        long_message = "x" * 70
        sources = StaticAnswerSource(recent=["fix login redirect", long_message])
        provider = scripted("feat", True, "fix login redirect", "", "")
        answers = FlowSequencer(build_steps(_config(), sources), provider).run()

        options = provider.requests[2].options
        assert options[0].label == "#1 fix login redirect"
        assert options[1].label == f"#2 {'x' * 60}..."
        assert options[1].value == long_message
        assert answers["subject"] == "fix login redirect"

    def test_recent_limit_zero_disables_offer(self, scripted):
        sources = StaticAnswerSource(recent=["fix login redirect"])
        provider = scripted("feat", "add x", "", "")
        FlowSequencer(build_steps(_config(), sources, recent_limit=0), provider).run()

        assert provider.requests[1].kind is PromptKind.TEXT

    def test_chosen_message_is_still_validated(self, scripted):
        sources = StaticAnswerSource(recent=["a message that is far too long"])
        provider = scripted("feat", True, "a message that is far too long", "short", "", "")
        answers = FlowSequencer(build_steps(_config(subjectLimit=10), sources), provider).run()

        retry = provider.requests[3]
        assert retry.kind is PromptKind.TEXT
        assert "10" in retry.error
        assert answers["subject"] == "short"

    def test_cancel_inside_sub_flow_cancels(self, scripted):
        sources = StaticAnswerSource(recent=["fix login redirect"])
        provider = scripted("feat", Signal.CANCEL)
        sequencer = FlowSequencer(build_steps(_config(), sources), provider)

        with pytest.raises(CancellationError):
            sequencer.run()
