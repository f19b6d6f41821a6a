"""Tap-burst simulator: hammer one request slot and report what got through."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import asdict, dataclass

from requestslot.factory import CoordinatorFactory
from requestslot.feedback import RecordingFeedbackSurface


@dataclass
class BurstSummary:
    taps: int
    acquired: int = 0
    blocked: int = 0
    completed: int = 0
    final_page: int = 1
    final_locked: bool = False
    feedback_actions: int = 0


async def run_burst(
    taps: int,
    interval_ms: int,
    latency_ms: int,
    toast_duration_ms: int,
    failed: bool = False,
) -> BurstSummary:
    surface = RecordingFeedbackSurface()
    factory = CoordinatorFactory(surface=surface)
    (slot,) = factory.init("burst")
    summary = BurstSummary(taps=taps)
    pending: list[asyncio.Future[None]] = []

    def on_complete() -> None:
        summary.completed += 1

    async def request() -> None:
        await asyncio.sleep(latency_ms / 1000)
        settle = slot.fail if failed else slot.success
        pending.append(settle(on_complete, {"duration": toast_duration_ms}))

    requests: list[asyncio.Task[None]] = []
    for index in range(taps):
        if slot.lock(page=index + 1):
            summary.acquired += 1
            slot.loading()
            requests.append(asyncio.create_task(request()))
        else:
            summary.blocked += 1
        await asyncio.sleep(interval_ms / 1000)

    await asyncio.gather(*requests)
    await asyncio.gather(*pending)

    summary.final_page = slot.page
    summary.final_locked = slot.locked
    summary.feedback_actions = len(surface.events)
    return summary


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate rapid taps against one request slot.")
    parser.add_argument("--taps", type=int, default=10)
    parser.add_argument("--interval-ms", type=int, default=50)
    parser.add_argument("--latency-ms", type=int, default=200)
    parser.add_argument("--duration-ms", type=int, default=1500)
    parser.add_argument("--fail", action="store_true", help="settle requests with fail()")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    summary = asyncio.run(
        run_burst(
            taps=args.taps,
            interval_ms=args.interval_ms,
            latency_ms=args.latency_ms,
            toast_duration_ms=args.duration_ms,
            failed=args.fail,
        )
    )
    print(json.dumps(asdict(summary), indent=2))


if __name__ == "__main__":
    main()
