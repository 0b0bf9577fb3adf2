import pytest

from eventforge.config import DispatcherConfig


def test_from_env_defaults(monkeypatch):
    for name in ("PRIORITY_COLLISION", "DEFAULT_PRIORITY", "TRACE_DISPATCH"):
        monkeypatch.delenv(f"EVENTFORGE_{name}", raising=False)
    config = DispatcherConfig.from_env()
    assert config == DispatcherConfig()
    assert config.priority_collision == "replace"


def test_from_env_reads_values(monkeypatch):
    monkeypatch.setenv("EVENTFORGE_PRIORITY_COLLISION", "Concatenate")
    monkeypatch.setenv("EVENTFORGE_DEFAULT_PRIORITY", "-3")
    monkeypatch.setenv("EVENTFORGE_TRACE_DISPATCH", "yes")
    config = DispatcherConfig.from_env()
    assert config.priority_collision == "concatenate"
    assert config.default_priority == -3
    assert config.trace_dispatch is True


def test_from_env_rejects_unknown_collision_mode(monkeypatch):
    monkeypatch.setenv("EVENTFORGE_PRIORITY_COLLISION", "merge")
    with pytest.raises(ValueError, match="EVENTFORGE_PRIORITY_COLLISION"):
        DispatcherConfig.from_env()


def test_from_env_rejects_non_integer_priority(monkeypatch):
    monkeypatch.delenv("EVENTFORGE_PRIORITY_COLLISION", raising=False)
    monkeypatch.setenv("EVENTFORGE_DEFAULT_PRIORITY", "high")
    with pytest.raises(ValueError, match="EVENTFORGE_DEFAULT_PRIORITY"):
        DispatcherConfig.from_env()


def test_constructor_validates_collision_mode():
    with pytest.raises(ValueError):
        DispatcherConfig(priority_collision="merge")
