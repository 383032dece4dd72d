"""Timing configuration shared by the AT clients."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable

ResponseTimeout = Callable[[float, float], float]
"""Computes the deadline (monotonic seconds) for a request sent at ``start``."""


def default_response_timeout(start: float, duration: float) -> float:
    """Return the deadline for a response: ``start`` plus ``duration``."""
    return start + duration


def _check_duration(duration: float) -> float:
    if duration < 0:
        raise ValueError(f"duration must not be negative, got {duration!r}")
    return duration


@dataclass(frozen=True)
class Config:
    """Timing configuration of the AT client.

    All durations are in seconds. The ``with_*`` methods return a new
    configuration and leave the original untouched.
    """

    cmd_cooldown: float = 0.020
    tx_timeout: float = 1.0
    flush_timeout: float = 1.0
    get_response_timeout: ResponseTimeout = field(default=default_response_timeout)

    def __post_init__(self) -> None:
        _check_duration(self.cmd_cooldown)
        _check_duration(self.tx_timeout)
        _check_duration(self.flush_timeout)

    def with_tx_timeout(self, duration: float) -> Config:
        return replace(self, tx_timeout=_check_duration(duration))

    def with_flush_timeout(self, duration: float) -> Config:
        return replace(self, flush_timeout=_check_duration(duration))

    def with_cmd_cooldown(self, duration: float) -> Config:
        return replace(self, cmd_cooldown=_check_duration(duration))

    def with_response_timeout(self, compute: ResponseTimeout) -> Config:
        """Use a custom computation of the response deadline.

        The deadline is recomputed continuously while waiting, so ``compute``
        may extend it, for example when flow control held the device back.
        """
        if not callable(compute):
            raise TypeError("compute must be callable")
        return replace(self, get_response_timeout=compute)

    def response_deadline(self, start: float, duration: float) -> float:
        """Return the deadline for a response to a request sent at ``start``."""
        return self.get_response_timeout(start, duration)