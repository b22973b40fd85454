"""Unit tests for in-process latency observability helpers."""

from __future__ import annotations

import pytest

from socialgraph.observability import latency_metrics_snapshot
from socialgraph.observability import record_latency
from socialgraph.observability import reset_latency_metrics
from socialgraph.observability import track_latency


class TestObservabilityLatency:
    def test_records_latency_aggregates(self):
        record_latency(operation="graph.stats", duration_ms=10.0, ok=True)
        record_latency(operation="graph.stats", duration_ms=30.0, ok=False)

        metrics = latency_metrics_snapshot()["graph.stats"]
        assert metrics["count"] == 2
        assert metrics["error_count"] == 1
        assert metrics["total_ms"] == 40.0
        assert metrics["avg_ms"] == 20.0
        assert metrics["min_ms"] == 10.0
        assert metrics["max_ms"] == 30.0

    def test_negative_durations_are_clamped(self):
        record_latency(operation="graph.stats", duration_ms=-5.0)
        assert latency_metrics_snapshot()["graph.stats"]["min_ms"] == 0.0

    def test_track_latency_marks_exceptions(self):
        with track_latency("graph.ok"):
            pass
        with pytest.raises(KeyError):
            with track_latency("graph.fail"):
                raise KeyError("boom")

        metrics = latency_metrics_snapshot()
        assert metrics["graph.ok"]["error_count"] == 0
        assert metrics["graph.fail"]["error_count"] == 1

    def test_reset_clears_all_metrics(self):
        record_latency(operation="graph.bootstrap", duration_ms=12.0)
        assert "graph.bootstrap" in latency_metrics_snapshot()
        reset_latency_metrics()
        assert latency_metrics_snapshot() == {}
