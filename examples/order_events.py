"""Example wiring for an order workflow.

Inspect it with ``eventforge-listeners examples.order_events`` or check it with
``eventforge-check examples.order_events``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from eventforge import DeferredListener, Event, EventDispatcher

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class OrderEvent(Event):
    order_id: str
    total: float = 0.0
    notes: list[str] = field(default_factory=list)


class FraudGuard:
    """Stops suspicious orders before anything else sees them."""

    limit = 10_000.0

    def get_subscribed_events(self):
        return {
            "order.created": ("check", 100),
            "order.paid": [("check", 100), ("log_payment",)],
        }

    def check(self, event: OrderEvent, event_name: str, dispatcher: EventDispatcher) -> None:
        if event.total > self.limit:
            event.notes.append("blocked")
            event.stop_propagation()

    def log_payment(self, event: OrderEvent, event_name: str, dispatcher: EventDispatcher) -> None:
        logger.info("Order %s paid", event.order_id)


class Mailer:
    def send_confirmation(self, event: OrderEvent, event_name: str, dispatcher: EventDispatcher) -> None:
        event.notes.append(f"mail:{event_name}")


def audit(event: OrderEvent, event_name: str, dispatcher: EventDispatcher) -> None:
    event.notes.append(f"audit:{event_name}")


def register(dispatcher: EventDispatcher) -> None:
    dispatcher.add_subscriber(FraudGuard())
    dispatcher.add_listener("order.*", audit, priority=-10)
    dispatcher.add_listener("order.created", DeferredListener(Mailer, "send_confirmation"))

    @dispatcher.listen("order.shipped", priority=5)
    def mark_shipped(event: OrderEvent, event_name: str, dispatcher: EventDispatcher) -> None:
        event.notes.append("shipped")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    app_dispatcher = EventDispatcher()
    register(app_dispatcher)
    order = app_dispatcher.dispatch(OrderEvent(order_id="A-1", total=42.0), "order.created")
    print(order.notes)
