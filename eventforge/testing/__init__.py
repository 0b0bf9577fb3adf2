"""Testing utilities for EventForge.

Requires the ``test`` extra (``pip install eventforge[test]``), which
provides pytest and faker.
"""

from .factory import EventNameFactory
from .fixtures import dispatcher, dispatcher_fixture
from .recorder import RecordedCall, RecordingListener

__all__ = [
    "EventNameFactory",
    "dispatcher",
    "dispatcher_fixture",
    "RecordedCall",
    "RecordingListener",
]
