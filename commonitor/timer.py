"""A periodic timer that keeps an elapsed hh:mm:ss clock and fires period callbacks."""

from __future__ import annotations

import threading
from collections.abc import Callable

DEFAULT_PERIOD_MS = 1000

TimeCallback = Callable[[int, int, int], object]
PeriodCallback = Callable[[], object]


class ClockTimer:
    """Runs in its own thread and calls ``on_time(h, m, s)`` and ``on_period()`` every period.

    The callbacks run on the timer thread, not on the caller's.
    """

    def __init__(
        self,
        period: int = DEFAULT_PERIOD_MS,
        on_time: TimeCallback | None = None,
        on_period: PeriodCallback | None = None,
        notifier: Callable[[str], object] | None = None,
    ):
        self.period = period
        self.on_time = on_time
        self.on_period = on_period
        self.notifier = notifier
        self._lock = threading.Lock()
        self._seconds = 0
        self._minutes = 0
        self._hours = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def period(self) -> int:
        """Period in milliseconds."""
        return self._period

    @period.setter
    def period(self, value: int) -> None:
        if value <= 0:
            raise ValueError(f"period must be positive, got {value}")
        self._period = value

    @property
    def running(self) -> bool:
        return self._thread is not None

    @property
    def elapsed(self) -> tuple[int, int, int]:
        """The clock as (hours, minutes, seconds)."""
        with self._lock:
            return self._hours, self._minutes, self._seconds

    def __enter__(self) -> ClockTimer:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    def start(self) -> None:
        """Reset the clock to zero and start firing every period."""
        if self._thread is not None:
            raise RuntimeError("timer is already running")
        if self.on_time is not None:
            self.on_time(0, 0, 0)
        with self._lock:
            self._hours = self._minutes = self._seconds = 0

        self._stop = threading.Event()
        thread = threading.Thread(target=self._run, args=(self._stop,), name="clock-timer", daemon=True)
        try:
            thread.start()
        except RuntimeError:
            if self.notifier is not None:
                self.notifier("创建系统定时器失败")
            return
        self._thread = thread

    def stop(self, set_zero: bool = False) -> None:
        """Stop firing; with ``set_zero`` report a zero clock afterwards."""
        thread = self._thread
        if thread is None:
            return
        self._stop.set()
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None
        if set_zero and self.on_time is not None:
            self.on_time(0, 0, 0)

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self._period / 1000):
            self.tick()

    def tick(self) -> None:
        """Advance the clock by one second and call the callbacks."""
        if self.on_time is not None:
            with self._lock:
                self._seconds += 1
                if self._seconds == 60:
                    self._seconds = 0
                    self._minutes += 1
                    if self._minutes == 60:
                        self._minutes = 0
                        self._hours += 1
                        if self._hours == 24:
                            self._hours = 0
                values = (self._hours, self._minutes, self._seconds)
            self.on_time(*values)

        if self.on_period is not None:
            self.on_period()