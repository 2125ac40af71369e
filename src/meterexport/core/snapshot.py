"""Measurement snapshot accessor.

Reads the fields each document layout needs from a meter and freezes them
into a snapshot. Windowing is the meter's business; this module only reads
and converts durations into the base time unit.
"""

import math
from functools import singledispatch
from typing import Any

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
    MeterSnapshot,
    TimerSnapshot,
    TimeUnit,
)
from meterexport.core.ports import (
    CounterView,
    DistributionSummaryView,
    GaugeView,
    LongTaskTimerView,
    TimeGaugeView,
    TimerView,
)


def _defined(value: float) -> float | None:
    """Map NaN and infinite readings to None."""
    return value if math.isfinite(value) else None


def counter_snapshot(meter: CounterView) -> CounterSnapshot:
    return CounterSnapshot(id=meter.id, count=float(meter.count()))


def gauge_snapshot(meter: GaugeView) -> GaugeSnapshot:
    return GaugeSnapshot(id=meter.id, value=_defined(float(meter.value())))


def time_gauge_snapshot(
    meter: TimeGaugeView, base_time_unit: TimeUnit
) -> GaugeSnapshot:
    return GaugeSnapshot(id=meter.id, value=_defined(meter.value(base_time_unit)))


def timer_snapshot(meter: TimerView, base_time_unit: TimeUnit) -> TimerSnapshot:
    return TimerSnapshot(
        id=meter.id,
        count=int(meter.count()),
        total=meter.total_time(base_time_unit),
        mean=meter.mean(base_time_unit),
        max=meter.max(base_time_unit),
    )


def summary_snapshot(meter: DistributionSummaryView) -> DistributionSummarySnapshot:
    return DistributionSummarySnapshot(
        id=meter.id,
        count=int(meter.count()),
        total=float(meter.total_amount()),
        mean=float(meter.mean()),
        max=float(meter.max()),
    )


def long_task_timer_snapshot(
    meter: LongTaskTimerView, base_time_unit: TimeUnit
) -> LongTaskTimerSnapshot:
    return LongTaskTimerSnapshot(
        id=meter.id,
        active_tasks=int(meter.active_tasks()),
        duration=meter.duration(base_time_unit),
    )


@singledispatch
def take_snapshot(
    meter: Any, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    """Snapshot a meter in the given base time unit.

    Meter classes from other sources can be supported by registering an
    implementation: ``take_snapshot.register(MyMeter, my_fn)``.

    Args:
        meter: A meter from meterexport.core.meters or a registered class.
        base_time_unit: Unit durations are converted into.

    Returns:
        The snapshot matching the meter's kind.

    Raises:
        TypeError: If no snapshot implementation is registered for the meter.
    """
    raise TypeError(f"no snapshot implementation for {type(meter).__name__}")


@take_snapshot.register(Counter)
@take_snapshot.register(FunctionCounter)
def _(
    meter: CounterView, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    return counter_snapshot(meter)


@take_snapshot.register(Gauge)
def _(
    meter: GaugeView, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    return gauge_snapshot(meter)


@take_snapshot.register(TimeGauge)
def _(
    meter: TimeGaugeView, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    return time_gauge_snapshot(meter, base_time_unit)


@take_snapshot.register(Timer)
def _(
    meter: TimerView, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    return timer_snapshot(meter, base_time_unit)


@take_snapshot.register(DistributionSummary)
def _(
    meter: DistributionSummaryView, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    return summary_snapshot(meter)


@take_snapshot.register(LongTaskTimer)
def _(
    meter: LongTaskTimerView, base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
) -> MeterSnapshot:
    return long_task_timer_snapshot(meter, base_time_unit)
