"""Listener values and late-bound listener resolution."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[..., Any]

_UNRESOLVED = object()


class DeferredListener:
    """Listener whose target object is built on first use.

    ``factory`` is called at most once, the first time the listener is looked
    up, compared or invoked. With ``method`` set, the listener resolves to that
    attribute of the built object; otherwise the object itself is the listener
    and must be callable.
    """

    __slots__ = ("factory", "method", "_resolved")

    def __init__(self, factory: Callable[[], Any], method: str | None = None) -> None:
        self.factory = factory
        self.method = method
        self._resolved: Any = _UNRESOLVED

    @property
    def is_resolved(self) -> bool:
        return self._resolved is not _UNRESOLVED

    def resolve(self) -> Listener:
        if self._resolved is _UNRESOLVED:
            target = self.factory()
            if self.method is not None:
                target = getattr(target, self.method)
            if not callable(target):
                raise TypeError(f"Deferred listener resolved to non-callable {target!r}")
            self._resolved = target
        return self._resolved

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.resolve()(*args, **kwargs)

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "pending"
        return f"DeferredListener({self.factory!r}, method={self.method!r}, {state})"


def resolve_listener(listener: Any) -> Listener:
    """Return the concrete callable for ``listener``."""
    if isinstance(listener, DeferredListener):
        return listener.resolve()
    return listener


def describe_listener(listener: Any) -> str:
    """Human readable listener label that never forces resolution."""
    if isinstance(listener, DeferredListener):
        if not listener.is_resolved:
            label = getattr(listener.factory, "__qualname__", repr(listener.factory))
            if listener.method:
                label = f"{label}().{listener.method}"
            return f"deferred {label}"
        listener = listener.resolve()
    owner = getattr(listener, "__self__", None)
    name = getattr(listener, "__qualname__", None)
    if owner is not None and name:
        return f"{type(owner).__name__}.{getattr(listener, '__name__', name)}"
    if name:
        module = getattr(listener, "__module__", None)
        return f"{module}.{name}" if module else name
    return repr(listener)


__all__ = ["DeferredListener", "Listener", "describe_listener", "resolve_listener"]
