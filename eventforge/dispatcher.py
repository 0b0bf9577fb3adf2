"""Listener registry and synchronous event dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, Iterator, List, TypeVar

from .config import DispatcherConfig
from .domain.events import StoppableEvent, event_name_for
from .domain.listeners import Listener, describe_listener, resolve_listener
from .domain.names import has_wildcard, is_pattern, wildcard_for
from .subscribers import EventSubscriber, iter_subscriptions

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT")
F = TypeVar("F", bound=Callable[..., Any])

Buckets = Dict[int, List[Any]]


@dataclass(slots=True, frozen=True)
class Registration:
    """One stored listener entry, as returned by ``iter_registrations``."""

    event_name: str
    priority: int
    listener: Any
    wildcard: bool = False


class EventDispatcher:
    """Register listeners by event name and priority, then dispatch events.

    Names containing ``.*`` register wildcard listeners: ``order.*`` receives
    every event whose first segment is ``order``. Listeners are delivered in
    descending priority order; equal priorities keep registration order.
    """

    def __init__(self, config: DispatcherConfig | None = None) -> None:
        self.config = config or DispatcherConfig()
        self._listeners: Dict[str, Buckets] = {}
        self._wildcard_listeners: Dict[str, Buckets] = {}
        self._sorted: Dict[str, List[Listener]] = {}
        self._lock = RLock()

    # registration -----------------------------------------------------

    def add_listener(self, event_name: str, listener: Any, priority: int | None = None) -> None:
        """Register ``listener`` for ``event_name``; higher priorities run first."""
        if priority is None:
            priority = self.config.default_priority
        with self._lock:
            if not is_pattern(event_name):
                self._listeners.setdefault(event_name, {}).setdefault(priority, []).append(listener)
            if is_pattern(event_name):
                self._wildcard_listeners.setdefault(event_name, {}).setdefault(priority, []).append(
                    listener
                )
            self._invalidate(event_name)
        logger.debug(
            "Added listener %s to '%s' at priority %d",
            describe_listener(listener),
            event_name,
            priority,
        )

    def listen(self, event_name: str, priority: int | None = None) -> Callable[[F], F]:
        """Decorator form of ``add_listener``."""

        def decorator(func: F) -> F:
            self.add_listener(event_name, func, priority)
            return func

        return decorator

    def remove_listener(self, event_name: str, listener: Any) -> None:
        """Remove every entry equal to ``listener`` registered under ``event_name``.

        Wildcard listeners must be removed with the exact pattern they were
        registered under.
        """
        with self._lock:
            if not self._listeners.get(event_name) and not self._wildcard_listeners.get(event_name):
                return
            listener = resolve_listener(listener)
            table = self._wildcard_listeners if has_wildcard(event_name) else self._listeners
            removed = self._unregister(table, event_name, listener)
            if removed:
                self._invalidate(event_name)
        if removed:
            logger.debug(
                "Removed %d listener(s) %s from '%s'", removed, describe_listener(listener), event_name
            )

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """Register every listener a subscriber declares, or none if one is invalid."""
        subscriptions = list(iter_subscriptions(subscriber))
        for subscription in subscriptions:
            self.add_listener(subscription.event_name, subscription.listener, subscription.priority)

    def remove_subscriber(self, subscriber: EventSubscriber) -> None:
        """Remove every listener a subscriber declares."""
        subscriptions = list(iter_subscriptions(subscriber))
        for subscription in subscriptions:
            self.remove_listener(subscription.event_name, subscription.listener)

    def clear(self) -> None:
        """Remove all listeners (useful in tests)."""
        with self._lock:
            self._listeners.clear()
            self._wildcard_listeners.clear()
            self._sorted.clear()

    # lookup -----------------------------------------------------------

    def get_listeners(
        self, event_name: str | None = None
    ) -> List[Listener] | Dict[str, List[Listener]]:
        """Listeners for ``event_name`` in call order, or all of them by name."""
        with self._lock:
            if event_name is not None:
                return list(self._resolved(event_name))

            names = list(self._listeners)
            names.extend(name for name in self._wildcard_listeners if name not in self._listeners)
            resolved = {name: list(self._resolved(name)) for name in names}
            return {name: listeners for name, listeners in resolved.items() if listeners}

    def get_listener_priority(self, event_name: str, listener: Any) -> int | None:
        """Priority ``listener`` is registered with for ``event_name``, or None."""
        with self._lock:
            if not self._listeners.get(event_name) and not self._wildcard_listeners.get(event_name):
                return None
            listener = resolve_listener(listener)
            merged = self._merge(event_name)
            for priority in sorted(merged, reverse=True):
                for candidate in merged[priority]:
                    if resolve_listener(candidate) == listener:
                        return priority
            return None

    def has_listeners(self, event_name: str | None = None) -> bool:
        """Whether ``event_name`` (taken literally) or any event has listeners."""
        with self._lock:
            if event_name is not None:
                return bool(self._listeners.get(event_name)) or bool(
                    self._wildcard_listeners.get(event_name)
                )
            return any(self._listeners.values()) or any(self._wildcard_listeners.values())

    def iter_registrations(self) -> Iterator[Registration]:
        """Yield stored entries, exact names first, without resolving them."""
        with self._lock:
            snapshot = [
                Registration(name, priority, listener, wildcard)
                for wildcard, table in ((False, self._listeners), (True, self._wildcard_listeners))
                for name, buckets in table.items()
                for priority in sorted(buckets, reverse=True)
                for listener in buckets[priority]
            ]
        return iter(snapshot)

    # dispatch ---------------------------------------------------------

    def dispatch(self, event: EventT, event_name: str | None = None) -> EventT:
        """Deliver ``event`` to its listeners and return it.

        Listeners are called as ``listener(event, event_name, dispatcher)``.
        Exceptions raised by a listener propagate to the caller and skip the
        remaining listeners.
        """
        if event_name is None:
            event_name = event_name_for(event)

        listeners = self.get_listeners(event_name)
        if not listeners:
            logger.debug("Dispatching '%s' with no listeners", event_name)
            return event

        logger.debug("Dispatching '%s' to %d listener(s)", event_name, len(listeners))
        self._call_listeners(listeners, event_name, event)
        return event

    def _call_listeners(self, listeners: List[Listener], event_name: str, event: Any) -> None:
        stoppable = isinstance(event, StoppableEvent)
        trace = self.config.trace_dispatch
        for listener in listeners:
            if stoppable and event.is_propagation_stopped():
                logger.debug("Propagation of '%s' stopped", event_name)
                break
            if trace:
                logger.debug("Calling %s for '%s'", describe_listener(listener), event_name)
            try:
                listener(event, event_name, self)
            except Exception:
                logger.debug(
                    "Listener %s failed for '%s'", describe_listener(listener), event_name
                )
                raise

    # internals --------------------------------------------------------

    def _resolved(self, event_name: str) -> List[Listener]:
        if not self._listeners.get(event_name) and not self._wildcard_listeners.get(
            wildcard_for(event_name)
        ):
            return []
        if event_name not in self._sorted:
            self._sorted[event_name] = self._sort_listeners(event_name)
        return self._sorted[event_name]

    def _sort_listeners(self, event_name: str) -> List[Listener]:
        merged = self._merge(event_name)
        return [
            resolve_listener(listener)
            for priority in sorted(merged, reverse=True)
            for listener in merged[priority]
        ]

    def _merge(self, event_name: str) -> Buckets:
        exact = self._listeners.get(event_name, {})
        wildcard = self._wildcard_listeners.get(wildcard_for(event_name), {})
        if self.config.priority_collision == "concatenate":
            merged: Buckets = {priority: list(bucket) for priority, bucket in exact.items()}
            for priority, bucket in wildcard.items():
                merged.setdefault(priority, []).extend(bucket)
            return merged
        merged = dict(exact)
        merged.update(wildcard)
        return merged

    def _unregister(self, table: Dict[str, Buckets], event_name: str, listener: Listener) -> int:
        buckets = table.get(event_name)
        if not buckets:
            return 0
        removed = 0
        for priority in list(buckets):
            kept = [fn for fn in buckets[priority] if resolve_listener(fn) != listener]
            removed += len(buckets[priority]) - len(kept)
            if kept:
                buckets[priority] = kept
            else:
                del buckets[priority]
        if not buckets:
            del table[event_name]
        return removed

    def _invalidate(self, event_name: str) -> None:
        self._sorted.pop(event_name, None)
        if is_pattern(event_name):
            for name in [name for name in self._sorted if wildcard_for(name) == event_name]:
                del self._sorted[name]


__all__ = ["EventDispatcher", "Registration"]
