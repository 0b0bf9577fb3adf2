"""Event name classification and wildcard derivation."""

from __future__ import annotations

SEPARATOR = "."
WILDCARD = "*"
WILDCARD_MARKER = SEPARATOR + WILDCARD


def is_pattern(event_name: str) -> bool:
    """Return True when the name registers into the wildcard table."""
    return WILDCARD_MARKER in event_name


def has_wildcard(event_name: str) -> bool:
    """Return True when the name contains any wildcard character.

    Removal uses this broader check to pick the wildcard table.
    """
    return WILDCARD in event_name


def wildcard_for(event_name: str) -> str:
    """Derive the single-level wildcard pattern for a dispatched name.

    ``order.created`` and ``order.created.v2`` both derive ``order.*``.
    Names without a separator and names that already are patterns are
    returned unchanged.
    """
    if SEPARATOR not in event_name or is_pattern(event_name):
        return event_name
    head, _, _ = event_name.partition(SEPARATOR)
    return head + WILDCARD_MARKER


def pattern_depth(pattern: str) -> int:
    """Number of segments before the wildcard marker of a pattern."""
    head = pattern.split(WILDCARD_MARKER, 1)[0]
    return len(head.split(SEPARATOR)) if head else 0
