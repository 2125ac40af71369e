"""Clock implementations for the Clock port."""

import threading
import time


class SystemClock:
    """Clock backed by the interpreter's wall and monotonic clocks."""

    def wall_time_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def monotonic_ns(self) -> int:
        return time.monotonic_ns()


class MockClock:
    """Manually advanced clock for deterministic tests.

    Both readings start at zero and move together when the clock is
    advanced.

    Example:
        ```python
        clock = MockClock()
        counter = Counter("requests", clock)
        counter.increment()
        clock.add_seconds(60)
        assert counter.count() == 1.0
        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._time_ns = 0

    def wall_time_ms(self) -> int:
        with self._lock:
            return self._time_ns // 1_000_000

    def monotonic_ns(self) -> int:
        with self._lock:
            return self._time_ns

    def add_ns(self, amount: int) -> int:
        """Advance the clock by ``amount`` nanoseconds.

        Returns:
            The new monotonic reading in nanoseconds.
        """
        with self._lock:
            self._time_ns += amount
            return self._time_ns

    def add_ms(self, amount: int) -> int:
        return self.add_ns(amount * 1_000_000)

    def add_seconds(self, amount: float) -> int:
        return self.add_ns(int(amount * 1_000_000_000))
