"""
Circuit Breaker for calls to the lessons backend.

Stops hammering a backend that keeps failing. Calls are never retried;
while the circuit is open they fail immediately.

States:
- CLOSED: Normal operation, calls pass through
- OPEN: Too many consecutive failures, calls are blocked
- HALF_OPEN: One trial call allowed to test recovery

Space updates after an order run on several threads at once, so all
state changes happen under a lock.
"""

import logging
import threading
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Any, Optional, Type


logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpenError(Exception):
    """Raised when a call is blocked by an open circuit."""
    pass


class CircuitBreaker:
    """
    Thread-safe circuit breaker.

    Examples:
        >>> cb = CircuitBreaker(failure_threshold=5, expected_exception=NetworkOrServerError)
        >>> try:
        ...     response = cb.call(session.get, url, timeout=10)
        ... except CircuitBreakerOpenError:
        ...     # Backend considered down, fail fast
        ...     ...
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        timeout: timedelta = timedelta(seconds=30),
        expected_exception: Type[Exception] = Exception,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize circuit breaker.

        Args:
            failure_threshold: Consecutive failures before opening the circuit
            timeout: Time to wait before allowing a trial call
            expected_exception: Exception type counted as a failure
            clock: Source of the current time
        """
        if failure_threshold <= 0:
            raise ValueError(f"failure_threshold must be positive, got: {failure_threshold}")

        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.expected_exception = expected_exception
        self._clock = clock
        self._lock = threading.Lock()

        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None
        self.state = CircuitState.CLOSED

        logger.debug(
            f"Circuit breaker initialized: "
            f"threshold={failure_threshold}, timeout={timeout}"
        )

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute function with circuit breaker protection.

        Raises:
            CircuitBreakerOpenError: If the circuit is OPEN
            Exception: Any exception raised by func
        """
        self._before_call()

        try:
            result = func(*args, **kwargs)
        except self.expected_exception:
            self._on_failure()
            raise

        self._on_success()
        return result

    def _before_call(self):
        with self._lock:
            if self.state == CircuitState.CLOSED:
                return

            if self.state == CircuitState.OPEN and self._should_attempt_reset():
                logger.info("Circuit breaker: Entering HALF_OPEN state")
                self.state = CircuitState.HALF_OPEN
                return

            # OPEN before the timeout, or a trial call is already running
            raise CircuitBreakerOpenError(
                f"Circuit breaker is {self.state.value.upper()} "
                f"(failures: {self.failure_count})"
            )

    def _should_attempt_reset(self) -> bool:
        if self.last_failure_time is None:
            return True
        return self._clock() - self.last_failure_time >= self.timeout

    def _on_success(self):
        with self._lock:
            if self.state == CircuitState.HALF_OPEN:
                logger.info("Circuit breaker: Back to CLOSED state")
            self.state = CircuitState.CLOSED
            self.failure_count = 0

    def _on_failure(self):
        with self._lock:
            self.failure_count += 1
            self.last_failure_time = self._clock()

            logger.warning(
                f"Circuit breaker: Failure #{self.failure_count} "
                f"(threshold={self.failure_threshold})"
            )

            if self.state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
                if self.state != CircuitState.OPEN:
                    logger.error(
                        f"Circuit breaker: OPEN after {self.failure_count} failures"
                    )
                self.state = CircuitState.OPEN
