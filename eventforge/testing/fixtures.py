"""Pytest fixtures for EventForge."""

from __future__ import annotations

import pytest

from ..config import DispatcherConfig
from ..dispatcher import EventDispatcher


@pytest.fixture()
def dispatcher() -> EventDispatcher:
    return EventDispatcher(DispatcherConfig())


def dispatcher_fixture(**kwargs) -> EventDispatcher:
    """Helper for ad-hoc tests where pytest is not available."""
    return EventDispatcher(DispatcherConfig(**kwargs))
