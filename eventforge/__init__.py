"""EventForge public API."""

from .config import DispatcherConfig
from .dispatcher import EventDispatcher, Registration
from .domain.events import Event, GenericEvent, StoppableEvent
from .domain.exceptions import EventForgeError, InvalidSubscription
from .domain.listeners import DeferredListener
from .subscribers import EventSubscriber

__all__ = [
    "DeferredListener",
    "DispatcherConfig",
    "Event",
    "EventDispatcher",
    "EventForgeError",
    "EventSubscriber",
    "GenericEvent",
    "InvalidSubscription",
    "Registration",
    "StoppableEvent",
]
