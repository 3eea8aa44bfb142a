"""Shared fixtures: a scripted prompt provider and sample configs."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional

import pytest

from commitwiz.config import WizardConfig
from commitwiz.core.prompts import PromptRequest


class ScriptedPromptProvider:
    """Replays queued responses and records every request it is given.

    A queued callable is called with the request, which lets a test look
    at sequencer state in the middle of a run.
    """

    def __init__(self, responses: Iterable[Any]):
        self.responses: List[Any] = list(responses)
        self.requests: List[PromptRequest] = []

    def ask(self, request: PromptRequest) -> Any:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected prompt for {request.step}: {request.message}")
        response = self.responses.pop(0)
        if callable(response):
            return response(request)
        return response

    @property
    def asked(self) -> List[Optional[str]]:
        return [request.step for request in self.requests]

    @property
    def messages(self) -> List[str]:
        return [request.message for request in self.requests]


@pytest.fixture
def scripted() -> Callable[..., ScriptedPromptProvider]:
    def factory(*responses: Any) -> ScriptedPromptProvider:
        return ScriptedPromptProvider(responses)

    return factory


@pytest.fixture
def types_config() -> WizardConfig:
    return WizardConfig.from_mapping(
        {
            "types": [
                {"value": "feat", "name": "Feature"},
                {"value": "fix", "name": "Bug fix"},
                {"value": "docs", "name": "Documentation"},
                {"value": "wip", "name": "Work in progress"},
            ],
        }
    )


@pytest.fixture
def scoped_config() -> WizardConfig:
    return WizardConfig.from_mapping(
        {
            "types": [
                {"value": "feat", "name": "Feature"},
                {"value": "docs", "name": "Documentation"},
                {"value": "wip", "name": "Work in progress"},
            ],
            "scopes": [{"name": "api"}, "auth", "ui", "parser"],
            "allowBreakingChanges": ["feat"],
        }
    )
