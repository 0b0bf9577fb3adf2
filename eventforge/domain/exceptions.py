"""Exceptions raised by EventForge."""


class EventForgeError(RuntimeError):
    """Base class for EventForge exceptions."""


class InvalidSubscription(EventForgeError):
    """Raised when a subscriber declares an unusable listener."""

    def __init__(self, subscriber: object, event_name: str, detail: str) -> None:
        super().__init__(
            f"{type(subscriber).__name__} subscription to '{event_name}' is invalid: {detail}"
        )
        self.subscriber = subscriber
        self.event_name = event_name
