"""Snake life-cycle states, including the nested pause state."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Phase(enum.Enum):
    """Tag of a :class:`SnakeState`."""

    ALIVE = "alive"
    DEAD = "dead"
    FORGIVE = "forgive"
    PAUSED = "paused"


@dataclass(frozen=True)
class SnakeState:
    """Tagged state value. ``PAUSED`` carries the state it interrupted.

    Only one level of nesting is valid: a paused state never wraps
    another paused state.
    """

    phase: Phase
    previous: SnakeState | None = None

    def __post_init__(self) -> None:
        if self.phase is Phase.PAUSED:
            assert self.previous is not None  # noqa: S101
            assert self.previous.phase is not Phase.PAUSED  # noqa: S101
        else:
            assert self.previous is None  # noqa: S101

    @property
    def is_paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def accepts_turns(self) -> bool:
        """Turn input is only honoured while alive or being forgiven."""
        return self.phase in (Phase.ALIVE, Phase.FORGIVE)

    def pause(self) -> SnakeState:
        return SnakeState(Phase.PAUSED, previous=self)

    def resume(self) -> SnakeState:
        assert self.previous is not None  # noqa: S101
        return self.previous

    def toggle_pause(self) -> SnakeState:
        return self.resume() if self.is_paused else self.pause()

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "previous": (
                self.previous.phase.value if self.previous is not None else None
            ),
        }


ALIVE = SnakeState(Phase.ALIVE)
DEAD = SnakeState(Phase.DEAD)
FORGIVE = SnakeState(Phase.FORGIVE)
