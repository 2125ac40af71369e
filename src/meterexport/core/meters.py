"""Step meters that back measurement snapshots.

Counters, timers and distribution summaries report activity of the previous
completed step: a value recorded now becomes visible once the clock has
crossed into the next step, and is gone again one step later. Maximums are
kept for the meter's whole lifetime.
"""

import math
import threading
import weakref
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any

from meterexport.core.models import MeterId, MeterType, Tag, TimeUnit
from meterexport.core.ports import Clock

DEFAULT_STEP_MS = 60_000


def _meter_id(
    name: str,
    meter_type: MeterType,
    tags: dict[str, str] | None,
    base_unit: str | None = None,
    description: str | None = None,
) -> MeterId:
    return MeterId(
        name=name,
        type=meter_type,
        tags=tuple(Tag(k, v) for k, v in (tags or {}).items()),
        base_unit=base_unit,
        description=description,
    )


def _reference(obj: Any) -> Callable[[], Any]:
    """Reference obj weakly where Python allows it, strongly otherwise."""
    if obj is None:
        return lambda: None
    try:
        return weakref.ref(obj)
    except TypeError:
        # int, float, str and friends cannot be weakly referenced
        return lambda: obj


class StepValue:
    """A value that accumulates per step and reports the previous step.

    Crossing into the next step moves the current value to the previous
    slot. When more than one step boundary was crossed the previous slot is
    reset to zero, since nothing was recorded in the step just before.
    """

    def __init__(self, clock: Clock, step_ms: int = DEFAULT_STEP_MS) -> None:
        self._clock = clock
        self._step_ms = step_ms
        self._lock = threading.Lock()
        self._current = 0.0
        self._previous = 0.0
        self._last_step = clock.wall_time_ms() // step_ms

    def _roll(self) -> None:
        # caller holds self._lock
        step = self._clock.wall_time_ms() // self._step_ms
        if step > self._last_step:
            self._previous = self._current if step == self._last_step + 1 else 0.0
            self._current = 0.0
            self._last_step = step

    def add(self, amount: float) -> None:
        with self._lock:
            self._roll()
            self._current += amount

    def poll(self) -> float:
        """Return the value accumulated during the previous step."""
        with self._lock:
            self._roll()
            return self._previous


class Counter:
    """Monotonically increasing count, reported per step."""

    def __init__(
        self,
        name: str,
        clock: Clock,
        tags: dict[str, str] | None = None,
        step_ms: int = DEFAULT_STEP_MS,
        base_unit: str | None = None,
    ) -> None:
        self.id = _meter_id(name, MeterType.COUNTER, tags, base_unit)
        self._value = StepValue(clock, step_ms)

    def increment(self, amount: float = 1.0) -> None:
        self._value.add(amount)

    def count(self) -> float:
        return self._value.poll()


class FunctionCounter:
    """Counter that follows a monotonic function of another object.

    The object is held weakly where possible. Once it is reclaimed the
    counter stops accruing.
    """

    def __init__(
        self,
        name: str,
        obj: Any,
        fn: Callable[[Any], float],
        clock: Clock,
        tags: dict[str, str] | None = None,
        step_ms: int = DEFAULT_STEP_MS,
    ) -> None:
        self.id = _meter_id(name, MeterType.COUNTER, tags)
        self._ref = _reference(obj)
        self._fn = fn
        self._lock = threading.Lock()
        self._last = 0.0
        self._value = StepValue(clock, step_ms)

    def count(self) -> float:
        obj = self._ref()
        if obj is not None:
            current = float(self._fn(obj))
            if math.isfinite(current):
                with self._lock:
                    delta = current - self._last
                    self._last = current
                if delta > 0:
                    self._value.add(delta)
        return self._value.poll()


class Gauge:
    """Instantaneous reading of a function of another object.

    The reading is NaN once the object has been reclaimed, or when no
    object was given.
    """

    def __init__(
        self,
        name: str,
        obj: Any,
        fn: Callable[[Any], float],
        tags: dict[str, str] | None = None,
        base_unit: str | None = None,
    ) -> None:
        self.id = _meter_id(name, MeterType.GAUGE, tags, base_unit)
        self._ref = _reference(obj)
        self._fn = fn

    def value(self) -> float:
        obj = self._ref()
        if obj is None:
            return math.nan
        return float(self._fn(obj))


class TimeGauge:
    """Gauge whose reading is a duration expressed in ``fn_unit``."""

    def __init__(
        self,
        name: str,
        obj: Any,
        fn_unit: TimeUnit,
        fn: Callable[[Any], float],
        tags: dict[str, str] | None = None,
    ) -> None:
        self.id = _meter_id(name, MeterType.GAUGE, tags)
        self._gauge = Gauge(name, obj, fn, tags)
        self._fn_unit = fn_unit

    def value(self, unit: TimeUnit) -> float:
        return self._fn_unit.convert(self._gauge.value(), unit)


class Timer:
    """Records durations of short events.

    Example:
        ```python
        timer = Timer("db.query", clock)
        with timer.time():
            run_query()
        ```
    """

    def __init__(
        self,
        name: str,
        clock: Clock,
        tags: dict[str, str] | None = None,
        step_ms: int = DEFAULT_STEP_MS,
    ) -> None:
        self.id = _meter_id(name, MeterType.TIMER, tags)
        self._clock = clock
        self._lock = threading.Lock()
        self._count = StepValue(clock, step_ms)
        self._total_ns = StepValue(clock, step_ms)
        self._max_ns = 0.0

    def record(self, amount: float, unit: TimeUnit = TimeUnit.MILLISECONDS) -> None:
        """Record one event. Negative and non-finite durations are ignored."""
        if not (math.isfinite(amount) and amount >= 0):
            return
        nanos = unit.convert(amount, TimeUnit.NANOSECONDS)
        self._count.add(1)
        self._total_ns.add(nanos)
        with self._lock:
            self._max_ns = max(self._max_ns, nanos)

    @contextmanager
    def time(self) -> Generator[None]:
        """Time the enclosed block, recording it even if it raises."""
        start = self._clock.monotonic_ns()
        try:
            yield
        finally:
            self.record(self._clock.monotonic_ns() - start, TimeUnit.NANOSECONDS)

    def count(self) -> int:
        return int(self._count.poll())

    def total_time(self, unit: TimeUnit) -> float:
        return TimeUnit.NANOSECONDS.convert(self._total_ns.poll(), unit)

    def mean(self, unit: TimeUnit) -> float:
        count = self.count()
        return self.total_time(unit) / count if count else 0.0

    def max(self, unit: TimeUnit) -> float:
        with self._lock:
            return TimeUnit.NANOSECONDS.convert(self._max_ns, unit)


class DistributionSummary:
    """Records the distribution of non-negative amounts (payload sizes, ...)."""

    def __init__(
        self,
        name: str,
        clock: Clock,
        tags: dict[str, str] | None = None,
        step_ms: int = DEFAULT_STEP_MS,
        base_unit: str | None = None,
    ) -> None:
        self.id = _meter_id(name, MeterType.DISTRIBUTION_SUMMARY, tags, base_unit)
        self._lock = threading.Lock()
        self._count = StepValue(clock, step_ms)
        self._total = StepValue(clock, step_ms)
        self._max = 0.0

    def record(self, amount: float) -> None:
        """Record one amount. Negative and non-finite amounts are ignored."""
        if not (math.isfinite(amount) and amount >= 0):
            return
        self._count.add(1)
        self._total.add(amount)
        with self._lock:
            self._max = max(self._max, float(amount))

    def count(self) -> int:
        return int(self._count.poll())

    def total_amount(self) -> float:
        return self._total.poll()

    def mean(self) -> float:
        count = self.count()
        return self.total_amount() / count if count else 0.0

    def max(self) -> float:
        with self._lock:
            return self._max


class LongTaskSample:
    """Handle to one in-flight task of a LongTaskTimer."""

    def __init__(self, timer: "LongTaskTimer", task_id: int) -> None:
        self._timer = timer
        self._task_id = task_id

    def stop(self) -> int:
        """Finish the task.

        Returns:
            Elapsed nanoseconds, or -1 if the task was already stopped.
        """
        return self._timer._stop(self._task_id)


class LongTaskTimer:
    """Tracks tasks that are still running (batch jobs, long polls)."""

    def __init__(
        self,
        name: str,
        clock: Clock,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.id = _meter_id(name, MeterType.LONG_TASK_TIMER, tags)
        self._clock = clock
        self._lock = threading.Lock()
        self._next_id = 0
        self._tasks: dict[int, int] = {}

    def start(self) -> LongTaskSample:
        with self._lock:
            task_id = self._next_id
            self._next_id += 1
            self._tasks[task_id] = self._clock.monotonic_ns()
        return LongTaskSample(self, task_id)

    def _stop(self, task_id: int) -> int:
        with self._lock:
            start = self._tasks.pop(task_id, None)
        if start is None:
            return -1
        return self._clock.monotonic_ns() - start

    @contextmanager
    def track(self) -> Generator[LongTaskSample]:
        """Keep a task active for the duration of the enclosed block."""
        sample = self.start()
        try:
            yield sample
        finally:
            sample.stop()

    def active_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def duration(self, unit: TimeUnit) -> float:
        with self._lock:
            now = self._clock.monotonic_ns()
            elapsed = sum(now - start for start in self._tasks.values())
        return TimeUnit.NANOSECONDS.convert(elapsed, unit)
