"""Domain models shared by the dispatcher."""

from .events import Event, GenericEvent, StoppableEvent, event_name_for
from .exceptions import EventForgeError, InvalidSubscription
from .listeners import DeferredListener, Listener, describe_listener, resolve_listener
from .names import WILDCARD_MARKER, has_wildcard, is_pattern, wildcard_for

__all__ = [
    "Event",
    "GenericEvent",
    "StoppableEvent",
    "event_name_for",
    "EventForgeError",
    "InvalidSubscription",
    "DeferredListener",
    "Listener",
    "describe_listener",
    "resolve_listener",
    "WILDCARD_MARKER",
    "has_wildcard",
    "is_pattern",
    "wildcard_for",
]
