"""
Debounced dispatch of search requests.

Every keystroke restarts the timer; only the text present when the
timer finally fires is searched for. The debouncer belongs to its
controller and is closed with it, which cancels any pending timer.
"""

import logging
import threading
from typing import Callable, Optional, Protocol


logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.3


class CancellableTimer(Protocol):
    """The part of ``threading.Timer`` the debouncer relies on."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], CancellableTimer]


def _daemon_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class Debouncer:
    """
    Calls ``action(value)`` once the input has been quiet for ``delay`` seconds.

    Examples:
        >>> debouncer = Debouncer(controller.run_search, delay=0.3)
        >>> for text in ("a", "ab", "abc"):
        ...     debouncer.submit(text)
        >>> # ~0.3s later: controller.run_search("abc") runs once
        >>> debouncer.close()
    """

    def __init__(
        self,
        action: Callable[[str], None],
        delay: float = DEFAULT_DELAY,
        timer_factory: TimerFactory = _daemon_timer
    ):
        """
        Initialize Debouncer.

        Args:
            action: Called with the latest value when the timer fires
            delay: Quiet period in seconds
            timer_factory: Creates the timer; defaults to a daemon threading.Timer
        """
        if delay < 0:
            raise ValueError(f"delay must not be negative, got: {delay}")

        self.action = action
        self.delay = delay
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[CancellableTimer] = None
        self._generation = 0
        self._closed = False

    def submit(self, value: str):
        """Cancel the pending dispatch, if any, and schedule one for ``value``."""
        with self._lock:
            if self._closed:
                logger.debug("Debouncer closed, ignoring input")
                return

            if self._timer is not None:
                self._timer.cancel()

            self._generation += 1
            generation = self._generation
            self._timer = self._timer_factory(
                self.delay, lambda: self._fire(generation, value)
            )
            self._timer.start()

    def _fire(self, generation: int, value: str):
        with self._lock:
            # A timer that lost a cancel race must not dispatch stale text
            if self._closed or generation != self._generation:
                return
            self._timer = None

        logger.debug(f"Dispatching debounced search: {value!r}")
        self.action(value)

    def close(self):
        """Cancel the pending dispatch and ignore all later input."""
        with self._lock:
            self._closed = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
