"""Core domain models for meter identities and measurement snapshots."""

from dataclasses import dataclass
from enum import Enum


class MeterType(Enum):
    """Kind of meter, used to pick the document layout."""

    COUNTER = "counter"
    GAUGE = "gauge"
    TIMER = "timer"
    DISTRIBUTION_SUMMARY = "distribution_summary"
    LONG_TASK_TIMER = "long_task_timer"


class TimeUnit(Enum):
    """Time unit with its length in nanoseconds."""

    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60_000_000_000
    HOURS = 3_600_000_000_000
    DAYS = 86_400_000_000_000

    def convert(self, amount: float, to: "TimeUnit") -> float:
        """Convert an amount expressed in this unit into another unit.

        Args:
            amount: Duration expressed in this unit.
            to: Target unit.

        Returns:
            The duration expressed in ``to`` as a float.
        """
        if self is to:
            return float(amount)
        return amount * self.value / to.value


@dataclass(frozen=True)
class Tag:
    """A single dimension of a meter.

    Attributes:
        key: Tag key (e.g., "method").
        value: Tag value (e.g., "GET").
    """

    key: str
    value: str


@dataclass(frozen=True)
class MeterId:
    """Identity of a meter.

    Attributes:
        name: Meter name (e.g., "http.server.requests").
        type: Kind of meter.
        tags: Tags in registration order. Order is kept as given.
        base_unit: Optional base unit of the measured values.
        description: Optional human readable description.
    """

    name: str
    type: MeterType
    tags: tuple[Tag, ...] = ()
    base_unit: str | None = None
    description: str | None = None

    def with_tag(self, key: str, value: str) -> "MeterId":
        """Return a copy of this id with a tag appended after existing ones."""
        return MeterId(
            name=self.name,
            type=self.type,
            tags=(*self.tags, Tag(key, value)),
            base_unit=self.base_unit,
            description=self.description,
        )


@dataclass(frozen=True)
class CounterSnapshot:
    """Counter or function counter reading.

    Attributes:
        id: Meter identity.
        count: Occurrences accrued during the previous step.
    """

    id: MeterId
    count: float


@dataclass(frozen=True)
class GaugeSnapshot:
    """Gauge or time gauge reading.

    Attributes:
        id: Meter identity.
        value: Current reading, or None when the reading is undefined.
    """

    id: MeterId
    value: float | None


@dataclass(frozen=True)
class TimerSnapshot:
    """Timer reading in the base time unit.

    Attributes:
        id: Meter identity.
        count: Events recorded during the previous step.
        total: Total time recorded during the previous step.
        mean: Mean time of the previous step.
        max: Largest duration ever recorded.
    """

    id: MeterId
    count: int
    total: float
    mean: float
    max: float


@dataclass(frozen=True)
class DistributionSummarySnapshot:
    """Distribution summary reading.

    Same windowed/cumulative split as TimerSnapshot: count, total and mean
    cover the previous step, max covers the meter's lifetime.
    """

    id: MeterId
    count: int
    total: float
    mean: float
    max: float


@dataclass(frozen=True)
class LongTaskTimerSnapshot:
    """Long task timer reading.

    Attributes:
        id: Meter identity.
        active_tasks: Tasks currently in flight.
        duration: Combined elapsed time of in-flight tasks, base time unit.
    """

    id: MeterId
    active_tasks: int
    duration: float


MeterSnapshot = (
    CounterSnapshot
    | GaugeSnapshot
    | TimerSnapshot
    | DistributionSummarySnapshot
    | LongTaskTimerSnapshot
)

