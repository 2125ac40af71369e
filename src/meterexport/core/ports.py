"""Port interfaces for collaborators of the bulk document writer.

These protocols define the contracts that clocks, sinks, naming conventions
and meters must satisfy. The encoders depend only on these interfaces, not
on concrete implementations.
"""

from typing import Protocol, runtime_checkable

from meterexport.core.models import MeterId, MeterType, TimeUnit


@runtime_checkable
class Clock(Protocol):
    """Port for reading time.

    Adapters implementing this protocol supply both wall time, used for
    document timestamps and step boundaries, and a monotonic reading, used
    for measuring durations. Examples: SystemClock, MockClock.
    """

    def wall_time_ms(self) -> int:
        """Return the current epoch time in milliseconds."""
        ...

    def monotonic_ns(self) -> int:
        """Return a monotonic reading in nanoseconds."""
        ...


@runtime_checkable
class TextSink(Protocol):
    """Port for the destination of bulk documents.

    Any text stream with a ``write`` method qualifies (io.StringIO, an open
    text file, Utf8Sink around a binary stream). Sinks are not assumed to be
    thread-safe.
    """

    def write(self, text: str, /) -> object:
        """Append text to the sink."""
        ...


@runtime_checkable
class NamingConvention(Protocol):
    """Port for turning raw meter text into a backend's conventional form."""

    def name(
        self, name: str, meter_type: MeterType, base_unit: str | None = None
    ) -> str:
        """Return the conventional form of a meter name."""
        ...

    def tag_key(self, key: str) -> str:
        """Return the conventional form of a tag key."""
        ...

    def tag_value(self, value: str) -> str:
        """Return the conventional form of a tag value."""
        ...


class CounterView(Protocol):
    """Read-only view of a counter or function counter."""

    id: MeterId

    def count(self) -> float:
        """Return the count accrued during the previous step."""
        ...


class GaugeView(Protocol):
    """Read-only view of a gauge. NaN means the reading is undefined."""

    id: MeterId

    def value(self) -> float: ...


class TimeGaugeView(Protocol):
    """Read-only view of a gauge whose reading is a duration."""

    id: MeterId

    def value(self, unit: TimeUnit) -> float: ...


class TimerView(Protocol):
    """Read-only view of a timer.

    count, total_time and mean are windowed to the previous step; max is
    the largest duration ever recorded.
    """

    id: MeterId

    def count(self) -> int: ...

    def total_time(self, unit: TimeUnit) -> float: ...

    def mean(self, unit: TimeUnit) -> float: ...

    def max(self, unit: TimeUnit) -> float: ...


class DistributionSummaryView(Protocol):
    """Read-only view of a distribution summary, windowed like TimerView."""

    id: MeterId

    def count(self) -> int: ...

    def total_amount(self) -> float: ...

    def mean(self) -> float: ...

    def max(self) -> float: ...


class LongTaskTimerView(Protocol):
    """Read-only view of a long task timer."""

    id: MeterId

    def active_tasks(self) -> int: ...

    def duration(self, unit: TimeUnit) -> float: ...
