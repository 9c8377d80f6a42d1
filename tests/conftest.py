"""
Pytest configuration and fixtures for the incident chat tests.
"""
import pytest

from brain.incident_engine import IncidentWorkflowEngine
from brain.resources import EmergencyNumbers, ResourceProvider
from brain.session_store import SessionStore
from core import config
from tests.utils.fakes import ScriptedLLM


@pytest.fixture(autouse=True)
def event_log_dir(tmp_path, monkeypatch):
    """Keep JSONL event logs out of the repository."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(config, "LOG_DIR", log_dir)
    monkeypatch.setattr(config, "EVENT_LOG_ENABLED", True)
    return log_dir


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def numbers():
    return EmergencyNumbers(police="117", ambulance="144", fire="118", samaritan="143")


@pytest.fixture
def alerts():
    """Collects the contexts passed to the emergency notifier."""
    return []


@pytest.fixture
def engine(llm, store, numbers, alerts):
    return IncidentWorkflowEngine(
        llm=llm,
        store=store,
        resources=ResourceProvider(),
        emergency_numbers=numbers,
        notify_alert=lambda ctx: alerts.append(ctx.copy()),
        affirmation_fallback=False,
    )
