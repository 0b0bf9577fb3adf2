"""Event objects passed to listeners."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Protocol, runtime_checkable


@runtime_checkable
class StoppableEvent(Protocol):
    """Events that can halt delivery to the remaining listeners."""

    def is_propagation_stopped(self) -> bool: ...


class Event:
    """Base class for dispatched events.

    Subclasses may be plain classes or dataclasses; the propagation flag is
    kept outside the dataclass fields so it never shows up in ``__eq__``.
    """

    _propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        """Skip every listener that has not been called yet."""
        self._propagation_stopped = True

    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped


@dataclass(eq=False)
class GenericEvent(Event):
    """Event wrapping a subject and free-form arguments."""

    subject: Any = None
    arguments: MutableMapping[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.arguments[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.arguments[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.arguments

    def get(self, key: str, default: Any = None) -> Any:
        return self.arguments.get(key, default)

    def with_arguments(self, arguments: Mapping[str, Any]) -> "GenericEvent":
        self.arguments = dict(arguments)
        return self


def event_name_for(event: object) -> str:
    """Name used when an event is dispatched without an explicit name."""
    cls = type(event)
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = ["Event", "GenericEvent", "StoppableEvent", "event_name_for"]
