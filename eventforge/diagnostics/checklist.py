"""Automated checks to highlight surprising listener setups."""

from __future__ import annotations

from dataclasses import dataclass

from ..dispatcher import EventDispatcher
from ..domain.names import (
    SEPARATOR,
    WILDCARD_MARKER,
    has_wildcard,
    is_pattern,
    pattern_depth,
    wildcard_for,
)


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(dispatcher: EventDispatcher) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    registrations = list(dispatcher.iter_registrations())
    if not registrations:
        issues.append(ChecklistIssue("warning", "No listeners are registered."))
        return issues

    exact: dict[str, set[int]] = {}
    wildcard: dict[str, set[int]] = {}
    for entry in registrations:
        target = wildcard if entry.wildcard else exact
        target.setdefault(entry.event_name, set()).add(entry.priority)

    for name in exact:
        if has_wildcard(name):
            issues.append(
                ChecklistIssue(
                    "error",
                    f"'{name}' contains '*' without '{WILDCARD_MARKER}': it is registered as an "
                    "exact name and its listeners cannot be removed.",
                )
            )

    for pattern in wildcard:
        if pattern_depth(pattern) > 1:
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"Pattern '{pattern}' has more than one segment; wildcards match on the first "
                    "segment only, so only dispatching the literal pattern reaches it.",
                )
            )

    if dispatcher.config.priority_collision == "replace":
        for name, priorities in exact.items():
            if SEPARATOR not in name or is_pattern(name):
                continue
            pattern = wildcard_for(name)
            shadowed = sorted(priorities & wildcard.get(pattern, set()), reverse=True)
            if shadowed:
                issues.append(
                    ChecklistIssue(
                        "warning",
                        f"Listeners of '{name}' at priority {', '.join(map(str, shadowed))} are "
                        f"replaced by '{pattern}' listeners at the same priority.",
                    )
                )

    return issues
