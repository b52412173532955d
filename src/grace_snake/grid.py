"""Grid coordinates, movement, and the occupancy board for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import NamedTuple

import numpy as np

Anchor = tuple[float, float, float]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    The y axis points up, so ``UP`` increments ``y``.
    """

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def is_vertical(self) -> bool:
        return self.value[0] == 0

    def is_perpendicular(self, other: Direction) -> bool:
        """True when *other* lies on the other axis."""
        return self.is_vertical != other.is_vertical


class Cell(NamedTuple):
    """An (x, y) grid address."""

    x: int
    y: int


def move(cell: Cell, direction: Direction, board_size: int) -> tuple[Cell, bool]:
    """Step one cell along *direction*.

    Returns ``(new_cell, hit_wall)``. A step that would leave the board
    returns the unchanged cell and ``hit_wall=True``; there is no wraparound.
    """
    dx, dy = direction.value
    x, y = cell.x + dx, cell.y + dy
    if not (0 <= x < board_size and 0 <= y < board_size):
        return cell, True
    return Cell(x, y), False


def random_cell(rng: np.random.Generator, board_size: int) -> Cell:
    """Draw a uniformly random cell on the board."""
    x, y = rng.integers(0, board_size, size=2)
    return Cell(int(x), int(y))


def to_anchor(
    cell: Cell, depth: float, board_size: int, cell_size: float,
) -> Anchor:
    """Convert a cell to a display-space anchor centred on the board."""
    half = board_size / 2.0
    return (
        (cell.x - half) * cell_size,
        (cell.y - half) * cell_size,
        depth,
    )


class Occupancy:
    """NumPy-backed set of cells covered by the snake body.

    Membership, insertion and removal are O(1) array lookups; the
    covered-cell count is tracked alongside the array.
    """

    def __init__(self, board_size: int) -> None:
        if board_size < 1:
            raise ValueError("board_size must be at least 1.")
        self.board_size = board_size
        self.cells = np.zeros((board_size, board_size), dtype=np.bool_)
        self._count = 0

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, tuple) or len(cell) != 2:
            return False
        x, y = cell
        if not (0 <= x < self.board_size and 0 <= y < self.board_size):
            return False
        return bool(self.cells[x, y])

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Cell]:
        xs, ys = np.nonzero(self.cells)
        for x, y in zip(xs.tolist(), ys.tolist(), strict=True):
            yield Cell(x, y)

    def add(self, cell: Cell) -> None:
        if not self.cells[cell.x, cell.y]:
            self.cells[cell.x, cell.y] = True
            self._count += 1

    def discard(self, cell: Cell) -> None:
        if self.cells[cell.x, cell.y]:
            self.cells[cell.x, cell.y] = False
            self._count -= 1

    def clear(self) -> None:
        """Reset all cells to free."""
        self.cells[:] = False
        self._count = 0

    @property
    def is_full(self) -> bool:
        return self._count >= self.board_size * self.board_size

    def free_cells(self) -> list[Cell]:
        """Return every cell not covered, in row-major order."""
        return [Cell(x, y) for x, y in np.argwhere(~self.cells).tolist()]
