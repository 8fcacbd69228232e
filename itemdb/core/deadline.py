"""Request-scoped deadlines passed through every storage call."""

import time
from typing import Optional

from .errors import DeadlineExceeded


class Deadline:
    """A point in monotonic time after which storage work must stop."""

    def __init__(self, timeout: Optional[float] = None):
        if timeout is not None and timeout <= 0:
            timeout = None
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout if timeout is not None else None

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def remaining(self) -> Optional[float]:
        """Seconds left, or None for an unbounded deadline."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def lock_timeout(self) -> float:
        """Timeout argument for lock acquisition (-1 blocks forever)."""
        remaining = self.remaining()
        return -1 if remaining is None else remaining

    def check(self, what: str = "storage operation") -> None:
        if self.expired:
            raise DeadlineExceeded(f"Deadline exceeded during {what} (timeout {self.timeout}s)")


def ensure_deadline(deadline: Optional[Deadline]) -> Deadline:
    """Return `deadline`, or an unbounded one when the caller passed None."""
    return deadline if deadline is not None else Deadline()
