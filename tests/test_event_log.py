"""
Tests for the per-session JSONL event log.
"""
import json

import pytest

from core import config
from core.logging import event_log_path, log_event


class TestEventLogPath:

    def test_plain_id_is_used_as_is(self, event_log_dir):
        assert event_log_path("session-1_a.b") == event_log_dir / "session-1_a.b.jsonl"

    @pytest.mark.parametrize("session_id", ["team/alice", "../../x", "x" * 300, "..", "", "ünïcode id"])
    def test_unsafe_ids_stay_inside_log_dir(self, event_log_dir, session_id):
        path = event_log_path(session_id)
        assert path.parent == event_log_dir
        assert "/" not in path.name
        assert len(path.name) < 120

    def test_sanitized_ids_do_not_collide(self):
        assert event_log_path("team/alice") != event_log_path("team_alice")
        assert event_log_path("team/alice") != event_log_path("team:alice")


class TestLogEvent:

    def test_appends_json_lines(self, event_log_dir):
        log_event("s1", {"type": "turn", "n": 1})
        log_event("s1", {"type": "turn", "n": 2})

        lines = (event_log_dir / "s1.jsonl").read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines]
        assert [r["n"] for r in records] == [1, 2]
        assert records[0]["session_id"] == "s1"
        assert "timestamp" in records[0]

    def test_original_id_is_kept_in_the_record(self):
        log_event("team/alice", {"type": "turn"})

        record = json.loads(event_log_path("team/alice").read_text(encoding="utf-8"))
        assert record["session_id"] == "team/alice"

    def test_write_failure_is_not_raised(self, tmp_path, monkeypatch):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        monkeypatch.setattr(config, "LOG_DIR", blocker)

        log_event("s1", {"type": "turn"})

    def test_disabled(self, event_log_dir, monkeypatch):
        monkeypatch.setattr(config, "EVENT_LOG_ENABLED", False)
        log_event("s1", {"type": "turn"})
        assert not event_log_dir.exists()
