"""Configuration models for EventForge."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, get_args


PriorityCollision = Literal["replace", "concatenate"]


@dataclass(slots=True)
class DispatcherConfig:
    """Tune how a dispatcher merges and reports listeners.

    ``priority_collision`` decides what happens when an exact listener bucket
    and a wildcard bucket share a priority: ``"replace"`` keeps only the
    wildcard bucket, ``"concatenate"`` runs exact listeners then wildcard ones.
    """

    priority_collision: PriorityCollision = "replace"
    default_priority: int = 0
    trace_dispatch: bool = False

    def __post_init__(self) -> None:
        if self.priority_collision not in get_args(PriorityCollision):
            raise ValueError(f"Unsupported priority collision mode {self.priority_collision!r}")

    @classmethod
    def from_env(cls) -> "DispatcherConfig":
        """Create config from environment variables prefixed with EVENTFORGE_."""
        prefix = "EVENTFORGE_"
        collision = os.getenv(f"{prefix}PRIORITY_COLLISION", "replace").strip().lower()
        if collision not in get_args(PriorityCollision):
            raise ValueError(
                f"{prefix}PRIORITY_COLLISION must be one of "
                f"{', '.join(get_args(PriorityCollision))}, got {collision!r}"
            )

        raw_priority = os.getenv(f"{prefix}DEFAULT_PRIORITY", "0")
        try:
            default_priority = int(raw_priority)
        except ValueError as exc:
            raise ValueError(f"Invalid integer for {prefix}DEFAULT_PRIORITY: {raw_priority!r}") from exc

        return cls(
            priority_collision=collision,
            default_priority=default_priority,
            trace_dispatch=os.getenv(f"{prefix}TRACE_DISPATCH", "false").lower()
            in {"1", "true", "yes"},
        )
