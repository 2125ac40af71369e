"""Bulk-index export of meter snapshots."""

from meterexport.adapters.sinks import Utf8Sink
from meterexport.core.clock import MockClock, SystemClock
from meterexport.core.config import ExportConfig
from meterexport.core.encoding.bulk import BulkDocumentWriter, encode_bulk
from meterexport.core.export import render_cycle
from meterexport.core.meters import (
    Counter,
    DistributionSummary,
    FunctionCounter,
    Gauge,
    LongTaskTimer,
    TimeGauge,
    Timer,
)
from meterexport.core.models import (
    CounterSnapshot,
    DistributionSummarySnapshot,
    GaugeSnapshot,
    LongTaskTimerSnapshot,
    MeterId,
    MeterSnapshot,
    MeterType,
    Tag,
    TimerSnapshot,
    TimeUnit,
)
from meterexport.core.naming import (
    CAMEL_CASE,
    IDENTITY,
    SNAKE_CASE,
    UPPER_CAMEL_CASE,
    EscapingNamingConvention,
)
from meterexport.core.snapshot import take_snapshot

__all__ = [
    "CAMEL_CASE",
    "IDENTITY",
    "SNAKE_CASE",
    "UPPER_CAMEL_CASE",
    "BulkDocumentWriter",
    "Counter",
    "CounterSnapshot",
    "DistributionSummary",
    "DistributionSummarySnapshot",
    "EscapingNamingConvention",
    "ExportConfig",
    "FunctionCounter",
    "Gauge",
    "GaugeSnapshot",
    "LongTaskTimer",
    "LongTaskTimerSnapshot",
    "MeterId",
    "MeterSnapshot",
    "MeterType",
    "MockClock",
    "SystemClock",
    "Tag",
    "TimeGauge",
    "TimeUnit",
    "Timer",
    "TimerSnapshot",
    "Utf8Sink",
    "encode_bulk",
    "render_cycle",
    "take_snapshot",
]
