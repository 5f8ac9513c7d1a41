"""Background timers: the battery sampler and the periodic log refresh."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Final

from pydantic import ValidationError

from battrack.errors import RecorderError
from battrack.models.sample import Sample
from battrack.scheduling.models import IntervalSetting, format_period
from battrack.storage.recorder import Recorder
from battrack.system.battery import BatteryReader
from battrack.system.buffer import SharedBuffer
from battrack.utils.time import TimeUtils

logger: Final = logging.getLogger(__name__)

WaitFunction = Callable[[float], bool]


class PeriodicTask:
    """Runs an action, then sleeps for an adjustable interval, until stopped.

    The interval is read after each action completes, so a change made
    while the task sleeps applies from the following sleep. Sleeping is
    done on the stop event, which makes ``stop()`` interrupt it.

    Args:
        name: Thread name, also used in log messages
        action: Callable run once per tick
        interval: Interval between ticks
        stop_event: Event that ends the loop (created if omitted)
        wait: Sleep function returning True when the loop should end
            (defaults to ``stop_event.wait``; tests pass a fake clock)
    """

    def __init__(
        self,
        name: str,
        action: Callable[[], object],
        interval: IntervalSetting,
        stop_event: threading.Event | None = None,
        wait: WaitFunction | None = None,
    ) -> None:
        self.name = name
        self.action = action
        self.interval = interval
        self.stop_event = stop_event or threading.Event()
        self._wait = wait or self.stop_event.wait
        self._thread: threading.Thread | None = None
        self.error: BaseException | None = None

    def run(self) -> None:
        """Run the loop in the calling thread until stopped."""
        logger.debug("%s started (every %s)", self.name, format_period(self.interval.get()))
        while not self.stop_event.is_set():
            self.action()
            seconds = self.interval.get()
            if self._wait(seconds) or self.stop_event.is_set():
                break
        logger.debug("%s stopped", self.name)

    def start(self) -> threading.Thread:
        """Run the loop in a daemon thread."""
        self._thread = threading.Thread(target=self._run_guarded, name=self.name, daemon=True)
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        """Signal the loop to end after the current tick."""
        self.stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the background thread to finish."""
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_guarded(self) -> None:
        try:
            self.run()
        except Exception as exc:
            self.error = exc
            logger.error("%s terminated: %s", self.name, exc)


class Sampler:
    """Reads the battery on a timer and hands each sample on.

    Each tick reads the battery, stamps the reading with the wall-clock
    time and passes the sample to the recorder and/or the shared buffer.
    A missing battery skips the tick. A recorder failure is surfaced as a
    buffer warning and then either stops the sampler (``fail_on_error``)
    or is logged while samples continue to reach the buffer.
    """

    def __init__(
        self,
        reader: BatteryReader,
        interval: IntervalSetting,
        recorder: Recorder | None = None,
        buffer: SharedBuffer | None = None,
        clock: Callable[[], datetime] = TimeUtils.now_local,
        fail_on_error: bool = False,
        stop_event: threading.Event | None = None,
        wait: WaitFunction | None = None,
    ) -> None:
        self.reader = reader
        self.recorder = recorder
        self.buffer = buffer
        self.clock = clock
        self.fail_on_error = fail_on_error
        self.degraded = False
        self.task = PeriodicTask("sampler", self.tick, interval, stop_event, wait)

    @property
    def interval(self) -> IntervalSetting:
        return self.task.interval

    def tick(self) -> Sample | None:
        """Take one sample.

        Returns:
            The sample, or None if no battery reading was available

        Raises:
            RecorderError: If the log write fails and ``fail_on_error`` is set
        """
        reading = self.reader.read()
        if reading is None:
            return None

        try:
            sample = Sample.from_reading(reading, self.clock())
        except ValidationError as err:
            logger.warning("Discarding invalid battery reading: %s", err)
            return None

        if self.recorder is not None:
            self._record(self.recorder, sample)
        if self.buffer is not None:
            self.buffer.append(sample)
        return sample

    def _record(self, recorder: Recorder, sample: Sample) -> None:
        try:
            recorder.append(sample)
        except RecorderError as exc:
            if self.fail_on_error:
                logger.error("%s; stopping", exc)
                if self.buffer is not None:
                    self.buffer.set_warning(f"Sampling stopped: {exc}")
                raise
            if not self.degraded:
                logger.warning("%s; keeping samples in memory only", exc)
            self.degraded = True
            if self.buffer is not None:
                self.buffer.set_warning(f"Log unwritable: {exc.path}")
            return

        if self.degraded:
            logger.info("Sample log %s is writable again", recorder.path)
            self.degraded = False
            if self.buffer is not None:
                self.buffer.set_warning(None)

    def run(self) -> None:
        """Sample until stopped, in the calling thread."""
        self.task.run()

    def start(self) -> threading.Thread:
        """Sample in a daemon thread."""
        return self.task.start()

    def stop(self) -> None:
        self.task.stop()

    def join(self, timeout: float | None = None) -> None:
        self.task.join(timeout)


__all__ = ["IntervalSetting", "PeriodicTask", "Sampler", "format_period"]
