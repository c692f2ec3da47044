from foodlocator.core import metrics


def test_phase_window_keeps_recent_samples_only():
    metrics.reset_metrics()
    for _ in range(metrics.PHASE_WINDOW + 25):
        with metrics.record_phase_latency("geocode"):
            pass

    snapshot = metrics.snapshot_metrics()
    assert snapshot["phases"]["geocode"]["count"] == metrics.PHASE_WINDOW
    assert snapshot["phases"]["geocode"]["p50_ms"] >= 0
    metrics.reset_metrics()


def test_superseded_cycles_counted_and_reset():
    metrics.reset_metrics()
    metrics.record_superseded_cycle()
    metrics.record_superseded_cycle()

    assert metrics.snapshot_metrics()["superseded_cycles"] == 2
    metrics.reset_metrics()
    assert metrics.snapshot_metrics() == {"phases": {}, "superseded_cycles": 0}
