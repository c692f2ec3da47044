"""Search pipeline metrics.

Collects per-phase latency (geocode, search, enrich) and superseded cycle counts.
"""
import time
from contextlib import contextmanager
from collections import defaultdict, deque

# Percentiles cover the most recent samples per phase.
PHASE_WINDOW = 1000

_phase_timings_ms: dict[str, deque] = defaultdict(lambda: deque(maxlen=PHASE_WINDOW))
_superseded_cycles: int = 0


@contextmanager
def record_phase_latency(phase: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        _phase_timings_ms[phase].append((time.perf_counter() - start) * 1000.0)


def record_superseded_cycle() -> None:
    global _superseded_cycles
    _superseded_cycles += 1


def _percentiles(values) -> dict:
    if not values:
        return {"count": 0, "p50_ms": None, "p95_ms": None, "p99_ms": None}
    vals = sorted(values)
    count = len(vals)

    def _p(p: float) -> float:
        idx = int(round(p * (count - 1)))
        return vals[idx]
    return {"count": count, "p50_ms": _p(0.50), "p95_ms": _p(0.95), "p99_ms": _p(0.99)}


def snapshot_metrics() -> dict:
    return {
        "phases": {phase: _percentiles(values) for phase, values in _phase_timings_ms.items()},
        "superseded_cycles": _superseded_cycles,
    }


def reset_metrics() -> None:
    global _superseded_cycles
    _phase_timings_ms.clear()
    _superseded_cycles = 0
