"""Exception types raised by the commit wizard."""

from __future__ import annotations

from typing import Optional


class WizardError(Exception):
    """Base class for every error the wizard raises on purpose."""

    code = "WIZARD_ERROR"
    exit_code = 1

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion


class CancellationError(WizardError):
    """The user aborted the flow, explicitly or by going back from the first step."""

    code = "CANCELLED"
    exit_code = 0

    def __init__(self, message: str = "Operation cancelled", suggestion: Optional[str] = None):
        super().__init__(message, suggestion)


class ConfigError(WizardError):
    code = "CONFIG_ERROR"


__all__ = ["WizardError", "CancellationError", "ConfigError"]
