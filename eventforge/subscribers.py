"""Subscriber protocol and parsing of declared subscriptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Protocol, Sequence, Tuple, Union, runtime_checkable

from .domain.exceptions import InvalidSubscription
from .domain.listeners import Listener

MethodSpec = Union[str, Tuple[str], Tuple[str, int]]
SubscriptionSpec = Union[MethodSpec, Sequence[MethodSpec]]


@runtime_checkable
class EventSubscriber(Protocol):
    """Object that declares the events it listens to.

    ``get_subscribed_events`` maps event names to a method name, a
    ``(method, priority)`` pair or a list of such pairs::

        def get_subscribed_events(self):
            return {
                "order.created": "on_created",
                "order.paid": ("on_paid", 10),
                "order.*": [("audit", 100), ("notify",)],
            }
    """

    def get_subscribed_events(self) -> Mapping[str, SubscriptionSpec]: ...


@dataclass(slots=True, frozen=True)
class Subscription:
    event_name: str
    method: str
    listener: Listener
    priority: int = 0


def iter_subscriptions(subscriber: EventSubscriber) -> Iterator[Subscription]:
    """Expand a subscriber's declaration into bound listener entries."""
    for event_name, params in subscriber.get_subscribed_events().items():
        for method, priority in _expand(subscriber, event_name, params):
            try:
                listener = getattr(subscriber, method)
            except AttributeError as exc:
                raise InvalidSubscription(subscriber, event_name, f"no method '{method}'") from exc
            if not callable(listener):
                raise InvalidSubscription(subscriber, event_name, f"'{method}' is not callable")
            yield Subscription(event_name, method, listener, priority)


def _expand(subscriber: object, event_name: str, params: object) -> list[tuple[str, int]]:
    if isinstance(params, str):
        return [(params, 0)]
    if not isinstance(params, (list, tuple)) or not params:
        raise InvalidSubscription(subscriber, event_name, f"unsupported declaration {params!r}")
    if isinstance(params[0], str):
        return [_pair(subscriber, event_name, params)]
    return [_pair(subscriber, event_name, item) for item in params]


def _pair(subscriber: object, event_name: str, item: object) -> tuple[str, int]:
    if not isinstance(item, (list, tuple)) or not 1 <= len(item) <= 2 or not isinstance(item[0], str):
        raise InvalidSubscription(subscriber, event_name, f"expected (method, priority), got {item!r}")
    priority = item[1] if len(item) == 2 else 0
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise InvalidSubscription(subscriber, event_name, f"priority must be an int, got {priority!r}")
    return item[0], priority


__all__ = ["EventSubscriber", "Subscription", "iter_subscriptions"]
