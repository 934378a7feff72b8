"""Tests for LintStatistics."""

import json

from ifcollapse.core.stats import LintEvent, LintStatistics


class TestRecording:
    def test_counters(self):
        stats = LintStatistics()
        stats.record_candidate("collapsible_if")
        stats.record_candidate("collapsible_if")
        stats.record_match("collapsible_if")
        stats.record_diagnostic("collapsible_if")

        assert stats.candidates["collapsible_if"] == 2
        assert stats.get_match_count("collapsible_if") == 1
        assert stats.get_diagnostic_count("collapsible_if") == 1
        assert stats.get_match_count("other") == 0

    def test_rejections_per_guard(self):
        stats = LintStatistics()
        stats.record_guard_rejection("collapsible_if", "comment")
        stats.record_guard_rejection("collapsible_if", "comment")
        stats.record_guard_rejection("collapsible_if", "hygiene")

        assert stats.get_rejection_count("collapsible_if", "comment") == 2
        assert stats.get_rejection_count("collapsible_if", "hygiene") == 1
        assert stats.get_rejection_count("collapsible_if") == 3
        assert stats.get_rejection_count("other") == 0

    def test_events_are_emitted(self):
        stats = LintStatistics()
        seen = []
        stats.events.on(LintEvent.GUARD_REJECTED, lambda name, guard: seen.append((name, guard)))
        stats.events.on(LintEvent.FAILED, lambda name: seen.append((name, None)))

        stats.record_guard_rejection("collapsible_if", "comment")
        stats.record_failure("collapsible_if")

        assert seen == [("collapsible_if", "comment"), ("collapsible_if", None)]

    def test_reset_keeps_handlers(self):
        stats = LintStatistics()
        seen = []
        stats.events.on(LintEvent.MATCH, seen.append)
        stats.record_match("collapsible_if")
        stats.reset()

        assert stats.get_match_count("collapsible_if") == 0
        stats.record_match("collapsible_if")
        assert seen == ["collapsible_if", "collapsible_if"]


class TestSerialization:
    def test_summary(self):
        stats = LintStatistics()
        stats.record_candidate("collapsible_if")
        stats.record_match("collapsible_if")
        stats.record_guard_rejection("collapsible_if", "hygiene")

        assert stats.summary() == {
            "lints": 1,
            "total_matches": 1,
            "total_rejections": 1,
            "total_diagnostics": 0,
        }

    def test_json_round_trip(self):
        stats = LintStatistics()
        stats.record_candidate("collapsible_if")
        stats.record_guard_rejection("collapsible_if", "comment")
        stats.record_diagnostic("collapsible_if")

        data = json.loads(stats.to_json())
        assert data["guard_rejections"] == {"collapsible_if": {"comment": 1}}

        restored = LintStatistics.from_json(stats.to_json())
        assert restored.to_dict() == stats.to_dict()

    def test_report_logs(self, caplog):
        stats = LintStatistics()
        stats.record_candidate("collapsible_if")
        stats.record_guard_rejection("collapsible_if", "comment")
        with caplog.at_level("INFO", logger="IfCollapse"):
            stats.report()
        assert "collapsible_if: 1 candidates" in caplog.text
        assert "rejected by comment: 1" in caplog.text
