import pytest

from eventforge import Event, EventSubscriber, InvalidSubscription
from eventforge.subscribers import iter_subscriptions


class OrderSubscriber:
    def __init__(self):
        self.journal: list[str] = []

    def get_subscribed_events(self):
        return {
            "order.created": "on_created",
            "order.paid": ("on_paid", 10),
            "order.*": [("audit", 100), ("trace",)],
        }

    def on_created(self, event, event_name, dispatcher):
        self.journal.append("created")

    def on_paid(self, event, event_name, dispatcher):
        self.journal.append("paid")

    def audit(self, event, event_name, dispatcher):
        self.journal.append(f"audit:{event_name}")

    def trace(self, event, event_name, dispatcher):
        self.journal.append(f"trace:{event_name}")


class BrokenSubscriber:
    def __init__(self, declaration):
        self.declaration = declaration

    def get_subscribed_events(self):
        return self.declaration

    def handle(self, event, event_name, dispatcher):
        pass


def test_subscriber_satisfies_protocol():
    assert isinstance(OrderSubscriber(), EventSubscriber)
    assert not isinstance(object(), EventSubscriber)


def test_iter_subscriptions_expands_every_form():
    subscriber = OrderSubscriber()
    entries = [(s.event_name, s.method, s.priority) for s in iter_subscriptions(subscriber)]
    assert entries == [
        ("order.created", "on_created", 0),
        ("order.paid", "on_paid", 10),
        ("order.*", "audit", 100),
        ("order.*", "trace", 0),
    ]


def test_add_subscriber_registers_bound_methods(dispatcher):
    subscriber = OrderSubscriber()
    dispatcher.add_subscriber(subscriber)

    assert dispatcher.get_listener_priority("order.paid", subscriber.on_paid) == 10
    assert dispatcher.get_listener_priority("order.*", subscriber.audit) == 100

    dispatcher.dispatch(Event(), "order.paid")
    assert subscriber.journal == ["audit:order.paid", "paid", "trace:order.paid"]


def test_wildcard_subscription_reaches_undeclared_names(dispatcher):
    subscriber = OrderSubscriber()
    dispatcher.add_subscriber(subscriber)

    dispatcher.dispatch(Event(), "order.shipped")
    assert subscriber.journal == ["audit:order.shipped", "trace:order.shipped"]


def test_remove_subscriber_round_trip(dispatcher):
    subscriber = OrderSubscriber()
    dispatcher.add_subscriber(subscriber)
    dispatcher.remove_subscriber(subscriber)

    assert dispatcher.has_listeners() is False
    dispatcher.dispatch(Event(), "order.created")
    assert subscriber.journal == []


def test_remove_subscriber_keeps_other_subscribers(dispatcher):
    first = OrderSubscriber()
    second = OrderSubscriber()
    dispatcher.add_subscriber(first)
    dispatcher.add_subscriber(second)

    dispatcher.remove_subscriber(first)

    assert dispatcher.get_listeners("order.*") == [second.audit, second.trace]
    assert dispatcher.get_listeners("order.paid") == [second.audit, second.on_paid, second.trace]


@pytest.mark.parametrize(
    "declaration",
    [
        {"order.created": "missing"},
        {"order.created": ("handle", "high")},
        {"order.created": ("handle", True)},
        {"order.created": 42},
        {"order.created": []},
        {"order.created": [("handle", 1, 2)]},
    ],
)
def test_invalid_declarations_raise(dispatcher, declaration):
    with pytest.raises(InvalidSubscription):
        dispatcher.add_subscriber(BrokenSubscriber(declaration))


class HalfValidSubscriber:
    def get_subscribed_events(self):
        return {"order.created": "handle", "order.paid": "missing"}

    def handle(self, event, event_name, dispatcher):
        pass


def test_rejected_subscriber_registers_nothing(dispatcher):
    with pytest.raises(InvalidSubscription):
        dispatcher.add_subscriber(HalfValidSubscriber())

    assert dispatcher.has_listeners() is False
    assert dispatcher.get_listeners("order.created") == []


def test_rejected_subscriber_removes_nothing(dispatcher):
    subscriber = HalfValidSubscriber()
    dispatcher.add_listener("order.created", subscriber.handle)

    with pytest.raises(InvalidSubscription):
        dispatcher.remove_subscriber(subscriber)

    assert dispatcher.get_listeners("order.created") == [subscriber.handle]
