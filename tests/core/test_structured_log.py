"""
Tests for core/structured_log.py - JSONL event log.
"""
from __future__ import annotations

import json

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from core import structured_log
from core.structured_log import jlog, read_recent_logs


class TestJlog:
    """Tests for writing events."""

    def test_writes_json_line(self, isolated_event_log):
        jlog("streak_analysis_start", csv="prices.csv")

        lines = (isolated_event_log / "events.jsonl").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        rec = json.loads(lines[0])
        assert rec["event"] == "streak_analysis_start"
        assert rec["level"] == "INFO"
        assert rec["csv"] == "prices.csv"
        assert "ts" in rec

    def test_echoes_to_stderr(self, capsys):
        jlog("streak_analysis_failed", level="ERROR", error_code="DATA_LOAD_FAIL")

        captured = capsys.readouterr()
        assert "[ERROR] streak_analysis_failed" in captured.err
        assert "DATA_LOAD_FAIL" in captured.err
        # stdout belongs to command output
        assert captured.out == ""

    def test_non_serializable_fields(self, isolated_event_log):
        jlog("event", path=Path("a/b.csv"))

        rec = json.loads((isolated_event_log / "events.jsonl").read_text(encoding="utf-8"))
        assert rec["path"].endswith("b.csv")

    def test_creates_log_dir_lazily(self, isolated_event_log):
        assert not isolated_event_log.exists()
        jlog("event")
        assert structured_log.LOG_FILE.exists()


class TestReadRecentLogs:
    """Tests for reading events back."""

    def test_no_file(self):
        assert read_recent_logs() == []

    def test_order_and_count(self):
        for i in range(5):
            jlog("event", n=i)

        entries = read_recent_logs(count=3)
        assert [e["n"] for e in entries] == [2, 3, 4]

    def test_level_filter(self):
        jlog("ok")
        jlog("bad", level="ERROR")
        jlog("ok")

        entries = read_recent_logs(level="ERROR")
        assert [e["event"] for e in entries] == ["bad"]
