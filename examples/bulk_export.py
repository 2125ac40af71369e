"""Export a few meters as bulk-index NDJSON, one payload per step.

Run with:
    python examples/bulk_export.py

Each payload can be POSTed as-is to a document store's ``_bulk`` endpoint
with ``Content-Type: application/x-ndjson``.
"""

import logging
import random
import sys
import time

from meterexport import (
    Counter,
    DistributionSummary,
    ExportConfig,
    Gauge,
    LongTaskTimer,
    SystemClock,
    Timer,
    render_cycle,
)

logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

CONFIG = ExportConfig(step_seconds=1.0)
STEP_MS = CONFIG.step_ms


class WorkQueue:
    def __init__(self) -> None:
        self.items: list[int] = []


def main() -> None:
    clock = SystemClock()
    queue = WorkQueue()

    requests = Counter("http.requests", clock, tags={"method": "GET"}, step_ms=STEP_MS)
    latency = Timer("http.latency", clock, step_ms=STEP_MS)
    payloads = DistributionSummary(
        "http.payload", clock, step_ms=STEP_MS, base_unit="bytes"
    )
    backlog = Gauge("queue.backlog", queue, lambda q: len(q.items))
    batch = LongTaskTimer("batch.run", clock)
    meters = [requests, latency, payloads, backlog, batch]

    batch.start()
    for _ in range(3):
        for _ in range(random.randint(5, 20)):
            with latency.time():
                time.sleep(random.random() / 100)
            requests.increment()
            payloads.record(random.randint(100, 5000))
            queue.items.append(1)
        time.sleep(CONFIG.step_seconds)
        sys.stdout.write(render_cycle(meters, clock, CONFIG))


if __name__ == "__main__":
    main()
