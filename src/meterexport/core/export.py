"""Rendering of one reporting cycle."""

import logging
from collections.abc import Iterable
from typing import Any

from meterexport.core.config import ExportConfig
from meterexport.core.encoding.bulk import (
    INDEX_ACTION,
    BulkDocumentWriter,
    encode_bulk,
)
from meterexport.core.ports import Clock
from meterexport.core.snapshot import take_snapshot

logger = logging.getLogger(__name__)


def render_cycle(
    meters: Iterable[Any],
    clock: Clock,
    config: ExportConfig | None = None,
) -> str:
    """Snapshot every meter and encode the bulk-index payload.

    The clock is read once, so every document of the cycle carries the same
    timestamp.

    Args:
        meters: Meters supported by take_snapshot.
        clock: Source of the cycle timestamp.
        config: Export options. Defaults to ExportConfig().

    Returns:
        NDJSON payload, empty if no meter produced a document.
    """
    config = config or ExportConfig()
    timestamp_ms = clock.wall_time_ms()
    snapshots = [take_snapshot(meter, config.base_time_unit) for meter in meters]
    payload = encode_bulk(snapshots, timestamp_ms, BulkDocumentWriter(config.naming))
    logger.debug(
        "Rendered %d of %d meters at %d",
        payload.count(INDEX_ACTION),
        len(snapshots),
        timestamp_ms,
    )
    return payload
