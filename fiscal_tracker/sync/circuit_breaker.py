"""Circuit breaker guarding calls to the remote sheets endpoint.

States:
  CLOSED    -- calls flow through
  OPEN      -- the endpoint is considered down; calls fail fast
  HALF_OPEN -- the cool-down elapsed; one probe call is let through

Transitions:
  CLOSED -> OPEN: failure_threshold consecutive failed calls
  OPEN -> HALF_OPEN: recovery_timeout seconds since the last failure
  HALF_OPEN -> CLOSED: the probe succeeds
  HALF_OPEN -> OPEN: the probe fails

A "failed call" is one whose whole retry loop was exhausted; individual
retries do not count. While OPEN the repository serves the local store.
"""

import enum
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class CircuitState(enum.Enum):
    """Three states of the circuit breaker."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """Raised when a call is attempted while the breaker is OPEN.

    Attributes:
        endpoint_name: Name of the guarded endpoint.
    """

    def __init__(self, endpoint_name: str):
        self.endpoint_name = endpoint_name
        super().__init__(
            f"Circuit breaker OPEN for '{endpoint_name}': "
            f"remote endpoint unavailable, using local data"
        )


class CircuitBreaker:
    """Three-state circuit breaker with an injectable clock.

    Args:
        name: Name of the guarded endpoint, used in logs and errors.
        failure_threshold: Consecutive failed calls before opening.
        recovery_timeout: Seconds to stay OPEN before allowing a probe.
        clock: Callable returning monotonic seconds. Defaults to
               time.monotonic; tests inject a fake clock.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        clock: Callable[[], float] | None = None,
    ):
        self.name = name
        self.failure_threshold = max(1, failure_threshold)
        self.recovery_timeout = recovery_timeout
        self._clock = clock or time.monotonic

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at = 0.0

    @property
    def state(self) -> CircuitState:
        """Current state; an expired OPEN state reads as HALF_OPEN."""
        if (
            self._state == CircuitState.OPEN
            and self._clock() - self._opened_at >= self.recovery_timeout
        ):
            self._state = CircuitState.HALF_OPEN
            logger.info("%s: cool-down over, allowing a probe call (OPEN -> HALF_OPEN)", self.name)
        return self._state

    @property
    def is_call_permitted(self) -> bool:
        return self.state != CircuitState.OPEN

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def record_success(self) -> None:
        """A call succeeded: clear failures, close after a good probe."""
        self._failure_count = 0
        if self._state == CircuitState.HALF_OPEN:
            self._state = CircuitState.CLOSED
            logger.info("%s: probe succeeded (HALF_OPEN -> CLOSED)", self.name)

    def record_failure(self) -> None:
        """A call failed after all retries."""
        self._failure_count += 1
        if self._state == CircuitState.HALF_OPEN:
            self._trip("probe failed")
        elif self._state == CircuitState.CLOSED and self._failure_count >= self.failure_threshold:
            self._trip(f"{self._failure_count} consecutive failures")

    def reset(self) -> None:
        """Force the breaker back to CLOSED with no recorded failures."""
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at = 0.0
        logger.info("%s: circuit breaker reset to CLOSED", self.name)

    def _trip(self, reason: str) -> None:
        previous = self._state
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        logger.warning(
            "%s: circuit breaker tripped %s -> OPEN (%s)",
            self.name, previous.name, reason,
        )
