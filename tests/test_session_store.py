"""
Tests for the in-memory session store and the conversation context.
"""
import json
import threading
from concurrent.futures import ThreadPoolExecutor

from brain.session_state import ConversationContext, IncidentType, WorkflowState
from brain.session_store import SessionStore


class TestConversationContext:

    def test_defaults(self):
        ctx = ConversationContext(session_id="abc")
        assert ctx.workflow_state is WorkflowState.INITIAL
        assert ctx.incident_type is None
        assert ctx.collected_fields == {}
        assert ctx.emergency_alert_sent is False

    def test_has_field_ignores_blank_values(self):
        ctx = ConversationContext(session_id="abc")
        ctx.collected_fields["where"] = "   "
        ctx.update_field("who", "Sam")
        assert ctx.has_field("who")
        assert not ctx.has_field("where")
        assert not ctx.has_field("when")
        assert ctx.missing_fields(["who", "where", "when"]) == ["where", "when"]

    def test_copy_is_independent(self):
        ctx = ConversationContext(session_id="abc", incident_type=IncidentType.HUMAN)
        ctx.update_field("who", "Sam")

        clone = ctx.copy()
        clone.update_field("who", "Alex")
        clone.set_state(WorkflowState.COMPLETED)

        assert ctx.get_field("who") == "Sam"
        assert ctx.workflow_state is WorkflowState.INITIAL

    def test_debug_view_is_json_serializable(self):
        ctx = ConversationContext(session_id="abc", incident_type=IncidentType.FACILITY)
        view = ctx.debug_view()
        assert view["incidentType"] == "FACILITY"
        assert view["workflowState"] == "INITIAL"
        json.dumps(view)


class TestSessionStore:

    def test_get_or_create_returns_same_context(self):
        store = SessionStore()
        first = store.get_or_create("s1")
        assert store.get_or_create("s1") is first
        assert store.has("s1")
        assert len(store) == 1

    def test_get_unknown_session(self):
        assert SessionStore().get("missing") is None

    def test_update_replaces_context(self):
        store = SessionStore()
        ctx = store.get_or_create("s1").copy()
        ctx.set_state(WorkflowState.COMPLETED)

        store.update(ctx)

        assert store.get("s1").workflow_state is WorkflowState.COMPLETED

    def test_clear(self, event_log_dir):
        store = SessionStore()
        store.get_or_create("s1")

        assert store.clear("s1") is True
        assert store.clear("s1") is False
        assert not store.has("s1")

        events = [json.loads(line)["type"] for line in (event_log_dir / "s1.jsonl").read_text().splitlines()]
        assert events == ["session_start", "session_cleared"]

    def test_concurrent_creation_yields_one_context(self):
        store = SessionStore()
        barrier = threading.Barrier(16)

        def create(_):
            barrier.wait()
            return store.get_or_create("fresh")

        with ThreadPoolExecutor(max_workers=16) as pool:
            contexts = list(pool.map(create, range(16)))

        assert len(store) == 1
        assert all(ctx is contexts[0] for ctx in contexts)

    def test_clear_keeps_the_session_lock(self):
        store = SessionStore()
        store.get_or_create("s1")
        lock = store.session_lock("s1")

        store.clear("s1")

        assert store.session_lock("s1") is lock
        assert not lock.locked()

    def test_session_lock_is_per_session(self):
        store = SessionStore()
        assert store.session_lock("a") is store.session_lock("a")
        assert store.session_lock("a") is not store.session_lock("b")
