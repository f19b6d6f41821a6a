from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

LOCK_ATTEMPTS_TOTAL = Counter(
    "request_slot_lock_attempts_total",
    "Lock attempts by outcome.",
    ["slot", "result"],
)
RELEASES_TOTAL = Counter(
    "request_slot_releases_total",
    "Unlock calls, including redundant ones.",
    ["slot"],
)
COMPLETIONS_TOTAL = Counter(
    "request_slot_completions_total",
    "Completion feedback sequences by outcome.",
    ["slot", "outcome"],
)
LOCKED = Gauge(
    "request_slot_locked",
    "Primary lock held (1) or free (0).",
    ["slot"],
)
HOLD_SECONDS = Histogram(
    "request_slot_hold_seconds",
    "Time between a successful lock and its release.",
    ["slot"],
)


class Telemetry:
    def record_lock_attempt(self, slot: str, acquired: bool) -> None:
        LOCK_ATTEMPTS_TOTAL.labels(
            slot=slot,
            result="acquired" if acquired else "blocked",
        ).inc()
        if acquired:
            LOCKED.labels(slot=slot).set(1)

    def record_release(self, slot: str, held_seconds: float | None) -> None:
        RELEASES_TOTAL.labels(slot=slot).inc()
        LOCKED.labels(slot=slot).set(0)
        if held_seconds is not None:
            HOLD_SECONDS.labels(slot=slot).observe(max(0.0, held_seconds))

    def record_completion(self, slot: str, failed: bool) -> None:
        COMPLETIONS_TOTAL.labels(slot=slot, outcome="fail" if failed else "success").inc()

    @staticmethod
    def scrape() -> tuple[bytes, str]:
        return generate_latest(), CONTENT_TYPE_LATEST
