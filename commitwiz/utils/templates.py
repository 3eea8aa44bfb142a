"""Helpers for commit templates and branch-derived issue references."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, Mapping, Optional

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

_ISSUE_PATTERNS = (
    re.compile(r"(?:issue|fix|bug|feature|feat)[/-]?(\d+)", re.IGNORECASE),
    re.compile(r"([A-Z]+-\d+)"),
    re.compile(r"(\d+)"),
)


def expand_template(
    template: str,
    variables: Optional[Mapping[str, str]] = None,
    branch: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Replace ``{name}`` placeholders; unknown placeholders are left untouched."""

    now = now or datetime.now()
    values: Dict[str, str] = {
        "date": now.strftime("%Y-%m-%d"),
        "time": now.strftime("%H:%M:%S"),
    }
    if branch:
        values["branch"] = branch
    values.update(variables or {})

    return _PLACEHOLDER.sub(lambda match: str(values.get(match.group(1), match.group(0))), template)


def extract_issue_from_branch(branch: Optional[str]) -> Optional[str]:
    """Pull an issue id out of names like ``feature/42``, ``fix-7`` or ``PROJ-123-login``."""

    if not branch:
        return None
    for pattern in _ISSUE_PATTERNS:
        match = pattern.search(branch)
        if match:
            return match.group(1)
    return None


def format_issue_reference(issue: str) -> str:
    return f"#{issue}" if issue.isdigit() else issue


__all__ = ["expand_template", "extract_issue_from_branch", "format_issue_reference"]
