"""A timer that blocks the calling thread until it expires."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class BlockingTimer:
    """Expires at a fixed point on the monotonic clock."""

    expires_at: float

    @classmethod
    def after(cls, duration: float) -> BlockingTimer:
        """Create a timer expiring ``duration`` seconds from now."""
        if duration < 0:
            raise ValueError(f"duration must not be negative, got {duration!r}")
        return cls(time.monotonic() + duration)

    def expired(self) -> bool:
        return self.expires_at <= time.monotonic()

    def wait(self) -> None:
        """Block until the timer has expired."""
        while True:
            remaining = self.expires_at - time.monotonic()
            if remaining <= 0:
                return
            time.sleep(remaining)