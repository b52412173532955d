"""Game configuration: board geometry and timing."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from grace_snake.grid import Cell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board geometry and scheduler timings.

    Supports JSON serialization for reproducibility.
    """

    # Board
    board_size: int = 16
    cell_size: float = 30.0
    init_length: int = 4

    # Scheduler durations
    speed_ms: int = 150
    death_time_ms: int = 600
    food_break_ms: int = 100
    forgiveness_break_ms: int = 100

    # Food placement
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.init_length < 1:
            raise ValueError("init_length must be at least 1.")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive.")
        for name in (
            "speed_ms", "death_time_ms", "food_break_ms", "forgiveness_break_ms",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        # The default row starts at x=1 and the default food sits ahead of it.
        if self.default_food_cell.x <= self.init_length:
            raise ValueError(
                "board_size is too small for init_length; the default body "
                "would overlap the default food cell."
            )

    @property
    def default_body_cells(self) -> list[Cell]:
        """Starting row, tail first; the head is the last cell."""
        row = self.board_size // 2
        return [Cell(i + 1, row) for i in range(self.init_length)]

    @property
    def default_food_cell(self) -> Cell:
        return Cell(self.board_size * 3 // 4, self.board_size // 2)

    @property
    def speed(self) -> float:
        return self.speed_ms / 1000.0

    @property
    def death_time(self) -> float:
        return self.death_time_ms / 1000.0

    @property
    def food_break(self) -> float:
        return self.food_break_ms / 1000.0

    @property
    def forgiveness_break(self) -> float:
        return self.forgiveness_break_ms / 1000.0

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError("Config file must hold a JSON object.")
        unknown = set(raw) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}.")
        return cls(**raw)
