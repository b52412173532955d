"""Resettable repeating countdown that gates simulation steps."""

from __future__ import annotations


class TickScheduler:
    """Repeating countdown measured in seconds.

    :meth:`tick` accumulates frame time; once the elapsed time reaches the
    duration the scheduler reports ``finished`` for that frame and keeps
    the overflow, so it fires again one duration later.
    """

    def __init__(self, duration: float) -> None:
        if duration <= 0:
            raise ValueError("duration must be positive.")
        self.duration = duration
        self.elapsed = 0.0
        self.finished = False

    def tick(self, delta: float) -> bool:
        """Advance by *delta* seconds and return whether the timer fired."""
        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if self.finished:
            self.elapsed %= self.duration
        return self.finished

    def set_duration(self, duration: float) -> None:
        """Replace the duration, keeping the current phase."""
        if duration <= 0:
            raise ValueError("duration must be positive.")
        self.duration = duration

    def reset(self) -> None:
        self.elapsed = 0.0
        self.finished = False

    def force_fire(self) -> None:
        """Restart the countdown and report this frame as fired."""
        self.reset()
        self.finished = True

    def to_dict(self) -> dict:
        return {
            "duration_ms": round(self.duration * 1000),
            "elapsed_ms": round(self.elapsed * 1000, 3),
            "finished": self.finished,
        }
