"""Bulk-index NDJSON encoder for meter snapshots.

Every document is a pair of lines: the index action ``{ "index" : {} }``
followed by the document itself. Documents are assembled by hand so that
member order and numeric rendering are exactly:

    {"@timestamp":...,"name":...,"type":...,<tags>,<fields>}

Names and tags pass through the writer's naming convention and are spliced
in verbatim. With the default identity convention they are NOT escaped; a
tag value containing a quote or backslash yields an invalid document. Use
EscapingNamingConvention to escape them.
"""

import io
import logging
from collections.abc import Iterable

from meterexport.core.encoding.json_text import (
    format_float,
    format_int,
    format_timestamp,
)
from meterexport.core.models import (
    CounterSnapshot,
    DistributionSummarySnapshot,
    GaugeSnapshot,
    LongTaskTimerSnapshot,
    MeterId,
    MeterSnapshot,
    TimerSnapshot,
)
from meterexport.core.naming import IDENTITY
from meterexport.core.ports import NamingConvention, TextSink

logger = logging.getLogger(__name__)

INDEX_ACTION = '{ "index" : {} }\n'


class BulkDocumentWriter:
    """Writes meter snapshots as bulk-index document pairs.

    Example:
        ```python
        sink = io.StringIO()
        BulkDocumentWriter().write_counter(sink, snapshot, clock.wall_time_ms())
        ```
    """

    def __init__(self, naming: NamingConvention = IDENTITY) -> None:
        """Initialize the writer.

        Args:
            naming: Convention applied to names and tags before splicing
                them into documents. Defaults to identity.
        """
        self._naming = naming

    def write_counter(
        self, sink: TextSink, snapshot: CounterSnapshot, timestamp_ms: int
    ) -> None:
        """Write a counter or function counter document."""
        self._emit(
            sink,
            snapshot.id,
            timestamp_ms,
            "counter",
            [("count", format_float(snapshot.count))],
        )

    def write_gauge(
        self, sink: TextSink, snapshot: GaugeSnapshot, timestamp_ms: int
    ) -> None:
        """Write a gauge or time gauge document.

        Nothing at all is written when the reading is undefined.
        """
        if snapshot.value is None:
            logger.debug("Skipping gauge %s with undefined value", snapshot.id.name)
            return
        self._emit(
            sink,
            snapshot.id,
            timestamp_ms,
            "gauge",
            [("value", format_float(snapshot.value))],
        )

    def write_timer(
        self, sink: TextSink, snapshot: TimerSnapshot, timestamp_ms: int
    ) -> None:
        """Write a timer document."""
        self._emit(
            sink,
            snapshot.id,
            timestamp_ms,
            "timer",
            [
                ("count", format_int(snapshot.count)),
                ("sum", format_float(snapshot.total)),
                ("mean", format_float(snapshot.mean)),
                ("max", format_float(snapshot.max)),
            ],
        )

    def write_summary(
        self,
        sink: TextSink,
        snapshot: DistributionSummarySnapshot,
        timestamp_ms: int,
    ) -> None:
        """Write a distribution summary document."""
        self._emit(
            sink,
            snapshot.id,
            timestamp_ms,
            "distribution_summary",
            [
                ("count", format_int(snapshot.count)),
                ("sum", format_float(snapshot.total)),
                ("mean", format_float(snapshot.mean)),
                ("max", format_float(snapshot.max)),
            ],
        )

    def write_long_task_timer(
        self, sink: TextSink, snapshot: LongTaskTimerSnapshot, timestamp_ms: int
    ) -> None:
        """Write a long task timer document."""
        self._emit(
            sink,
            snapshot.id,
            timestamp_ms,
            "long_task_timer",
            [
                ("activeTasks", format_int(snapshot.active_tasks)),
                ("duration", format_float(snapshot.duration)),
            ],
        )

    def write(
        self, sink: TextSink, snapshot: MeterSnapshot, timestamp_ms: int
    ) -> None:
        """Write any snapshot using the layout for its kind.

        Raises:
            TypeError: If snapshot is not a known snapshot type.
        """
        if isinstance(snapshot, CounterSnapshot):
            self.write_counter(sink, snapshot, timestamp_ms)
        elif isinstance(snapshot, GaugeSnapshot):
            self.write_gauge(sink, snapshot, timestamp_ms)
        elif isinstance(snapshot, TimerSnapshot):
            self.write_timer(sink, snapshot, timestamp_ms)
        elif isinstance(snapshot, DistributionSummarySnapshot):
            self.write_summary(sink, snapshot, timestamp_ms)
        elif isinstance(snapshot, LongTaskTimerSnapshot):
            self.write_long_task_timer(sink, snapshot, timestamp_ms)
        else:
            raise TypeError(f"unsupported snapshot type {type(snapshot).__name__}")

    def _emit(
        self,
        sink: TextSink,
        meter_id: MeterId,
        timestamp_ms: int,
        type_tag: str,
        fields: list[tuple[str, str]],
    ) -> None:
        # both lines in a single write
        body = self._document(meter_id, timestamp_ms, type_tag, fields)
        sink.write(INDEX_ACTION + body + "\n")

    def _document(
        self,
        meter_id: MeterId,
        timestamp_ms: int,
        type_tag: str,
        fields: list[tuple[str, str]],
    ) -> str:
        name = self._naming.name(meter_id.name, meter_id.type, meter_id.base_unit)
        parts = [
            f'"@timestamp":"{format_timestamp(timestamp_ms)}"',
            f'"name":"{name}"',
            f'"type":"{type_tag}"',
        ]
        for tag in meter_id.tags:
            key = self._naming.tag_key(tag.key)
            value = self._naming.tag_value(tag.value)
            parts.append(f'"{key}":"{value}"')
        parts.extend(f'"{field}":{rendered}' for field, rendered in fields)
        return "{" + ",".join(parts) + "}"


def encode_bulk(
    snapshots: Iterable[MeterSnapshot],
    timestamp_ms: int,
    writer: BulkDocumentWriter | None = None,
) -> str:
    """Encode snapshots into one bulk-index NDJSON payload.

    Args:
        snapshots: Snapshots to encode, in output order.
        timestamp_ms: Epoch milliseconds stamped on every document.
        writer: Writer to use. Defaults to one with the identity convention.

    Returns:
        NDJSON payload. Empty string if every snapshot was suppressed or
        there were none.
    """
    writer = writer or BulkDocumentWriter()
    sink = io.StringIO()
    for snapshot in snapshots:
        writer.write(sink, snapshot, timestamp_ms)
    return sink.getvalue()
