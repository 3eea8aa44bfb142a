"""Centralized configuration objects for the commit wizard."""

from __future__ import annotations

import json
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from commitwiz.errors import ConfigError
from commitwiz.utils.state import STEP_SEQUENCE

# Load .env file if it exists
PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = PROJECT_ROOT / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)

DEFAULT_SUBJECT_LIMIT = 100
REQUIRED_STEPS = frozenset({"type", "subject"})


class CommitType(BaseModel):
    """One entry of the commit type menu."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1)
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        return value or ""

    @property
    def label(self) -> str:
        return self.name or self.value


class WizardConfig(BaseModel):
    """Behavioral options for one run of the commit questions.

    Field names follow Python conventions; the camelCase keys used by
    ``.gittable.json`` and cz-customizable configs are accepted as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    types: Tuple[CommitType, ...]
    scopes: Tuple[str, ...] = ()
    scope_overrides: Tuple[str, ...] = Field((), alias="scopeOverrides")
    allow_ticket_number: bool = Field(False, alias="allowTicketNumber")
    is_ticket_number_required: bool = Field(False, alias="isTicketNumberRequired")
    ticket_number_regexp: Optional[str] = Field(None, alias="ticketNumberRegExp")
    ticket_number_prefix: str = Field("TICKET-", alias="ticketNumberPrefix")
    fallback_ticket_number: str = Field("", alias="fallbackTicketNumber")
    skip_questions: FrozenSet[str] = Field(frozenset(), alias="skipQuestions")
    allow_breaking_changes: FrozenSet[str] = Field(frozenset(), alias="allowBreakingChanges")
    ask_for_breaking_change_first: bool = Field(False, alias="askForBreakingChangeFirst")
    upper_case_subject: bool = Field(False, alias="upperCaseSubject")
    subject_limit: int = Field(DEFAULT_SUBJECT_LIMIT, ge=1, alias="subjectLimit")
    use_prepared_commit: bool = Field(False, alias="usePreparedCommit")

    @field_validator("types")
    @classmethod
    def _require_types(cls, value: Tuple[CommitType, ...]) -> Tuple[CommitType, ...]:
        if not value:
            raise ValueError("at least one commit type is required")
        return value

    @field_validator("scopes", "scope_overrides", mode="before")
    @classmethod
    def _scope_names(cls, value: Any) -> Tuple[str, ...]:
        if value is None:
            return ()
        names = []
        for scope in value:
            name = scope.get("name") if isinstance(scope, Mapping) else scope
            if name:
                names.append(str(name))
        return tuple(names)

    @field_validator("ticket_number_regexp")
    @classmethod
    def _compile_pattern(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid ticket number pattern: {exc}") from exc
        return value or None

    @field_validator("skip_questions")
    @classmethod
    def _check_skippable(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        unknown = value - set(STEP_SEQUENCE)
        if unknown:
            raise ValueError(f"unknown questions in skipQuestions: {', '.join(sorted(unknown))}")
        forced = value & REQUIRED_STEPS
        if forced:
            raise ValueError(f"cannot skip required questions: {', '.join(sorted(forced))}")
        return value

    @field_validator("subject_limit", mode="before")
    @classmethod
    def _default_limit(cls, value: Any) -> Any:
        # Falsy limits in JSON configs mean "use the default".
        return value or DEFAULT_SUBJECT_LIMIT

    @property
    def effective_scopes(self) -> Tuple[str, ...]:
        return self.scope_overrides or self.scopes

    @property
    def ticket_pattern(self) -> Optional["re.Pattern[str]"]:
        if not self.ticket_number_regexp:
            return None
        return re.compile(self.ticket_number_regexp)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WizardConfig":
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(
                f"Invalid commit configuration: {exc.error_count()} error(s)",
                suggestion=str(exc),
            ) from exc


class Settings(BaseModel):
    """Process level knobs, overridable from the environment."""

    recent_limit: int = Field(5, ge=0, le=50)
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def load_wizard_config(path: Path) -> WizardConfig:
    """Read a JSON commit configuration file."""

    path = Path(path)
    if not path.exists():
        raise ConfigError(
            f"No configuration found at {path}",
            suggestion="Create a .gittable.json with at least a 'types' list.",
        )

    try:
        with path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration file {path} is not valid JSON: {exc.msg}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a JSON object")
    return WizardConfig.from_mapping(data)


def _settings_from_env() -> Dict[str, Any]:
    """Allow lightweight overriding via environment variables."""

    overrides: Dict[str, Any] = {}

    recent_limit = os.getenv("COMMITWIZ_RECENT_LIMIT")
    if recent_limit is not None:
        overrides["recent_limit"] = int(recent_limit)

    log_level = os.getenv("COMMITWIZ_LOG_LEVEL")
    if log_level:
        overrides["log_level"] = log_level

    log_file = os.getenv("COMMITWIZ_LOG_FILE")
    if log_file:
        overrides["log_file"] = log_file

    return overrides


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings(**_settings_from_env())


__all__ = [
    "CommitType",
    "WizardConfig",
    "Settings",
    "get_settings",
    "load_wizard_config",
    "DEFAULT_SUBJECT_LIMIT",
]
