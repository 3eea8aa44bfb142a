"""Read-only collaborators the step table consults for defaults and suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence


class RecentAnswerSource(Protocol):
    """Port to repository history and stored templates.

    Implementations talk to git and the user's template directory; the
    wizard only reads from them.
    """

    def previous_commit(self) -> List[str]:
        """Lines of the previous commit message, or an empty list."""
        ...

    def recent_messages(self, limit: int) -> List[str]:
        ...

    def list_templates(self) -> List[str]:
        ...

    def load_template(self, name: str) -> Optional[str]:
        ...

    def current_branch(self) -> Optional[str]:
        ...


class NullAnswerSource:
    """Source with no history, no templates and no branch."""

    def previous_commit(self) -> List[str]:
        return []

    def recent_messages(self, limit: int) -> List[str]:
        return []

    def list_templates(self) -> List[str]:
        return []

    def load_template(self, name: str) -> Optional[str]:
        return None

    def current_branch(self) -> Optional[str]:
        return None


@dataclass
class StaticAnswerSource:
    """In-memory source, handy for scripted runs."""

    previous: Sequence[str] = ()
    recent: Sequence[str] = ()
    templates: Dict[str, str] = field(default_factory=dict)
    branch: Optional[str] = None

    def previous_commit(self) -> List[str]:
        return list(self.previous)

    def recent_messages(self, limit: int) -> List[str]:
        return list(self.recent)[:limit]

    def list_templates(self) -> List[str]:
        return sorted(self.templates)

    def load_template(self, name: str) -> Optional[str]:
        return self.templates.get(name)

    def current_branch(self) -> Optional[str]:
        return self.branch


__all__ = ["RecentAnswerSource", "NullAnswerSource", "StaticAnswerSource"]
