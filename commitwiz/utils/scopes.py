"""Grouping of configured scopes into menu categories."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

SCOPE_CATEGORIES: Dict[str, List[str]] = {
    "UI & Components": ["components", "ui", "styles", "theme"],
    "Business Logic": ["hooks", "utils", "helpers", "types", "models"],
    "Data & API": ["api", "services", "auth", "db", "database", "cache", "storage"],
    "Configuration": ["config", "env", "settings"],
    "Development & Testing": ["test", "tests", "logging", "debug"],
    "Infrastructure": ["infra", "deploy", "build", "ci"],
}

OTHER_CATEGORY = "Other"

_LOOKUP: Dict[str, str] = {
    name: category for category, names in SCOPE_CATEGORIES.items() for name in names
}


def scope_name(scope: Any) -> str:
    if isinstance(scope, Mapping):
        return str(scope.get("name", ""))
    return str(scope)


def categorize_scopes(scopes: Iterable[Any]) -> Dict[str, List[str]]:
    """Group scope names by category, keeping category order and dropping empty ones."""

    result: Dict[str, List[str]] = {category: [] for category in SCOPE_CATEGORIES}
    uncategorized: List[str] = []

    for scope in scopes:
        name = scope_name(scope)
        if not name:
            continue
        category = _LOOKUP.get(name)
        if category:
            result[category].append(name)
        else:
            uncategorized.append(name)

    if uncategorized:
        result[OTHER_CATEGORY] = uncategorized

    return {category: names for category, names in result.items() if names}


__all__ = ["SCOPE_CATEGORIES", "OTHER_CATEGORY", "categorize_scopes", "scope_name"]
