"""Snake body ring and buffered direction input."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from grace_snake.grid import Cell, Direction, Occupancy


@dataclass
class Segment:
    """One body segment: its grid cell and the presentation handle it owns."""

    cell: Cell
    handle: int


class Body:
    """Snake body stored as a ring over a growable list of segments.

    ``head`` is the storage index of the head segment; the tail is always
    the next slot, ``(head + 1) % len``. Moving the snake turns the tail
    segment into the new head, so no segment is ever shifted in storage.
    The occupancy board mirrors the segment cells.
    """

    def __init__(self, segments: Sequence[Segment], board_size: int) -> None:
        if not segments:
            raise ValueError("Body needs at least one segment.")
        self.segments: list[Segment] = list(segments)
        self.head = len(self.segments) - 1
        self.occupancy = Occupancy(board_size)
        for seg in self.segments:
            self.occupancy.add(seg.cell)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def tail(self) -> int:
        return (self.head + 1) % len(self.segments)

    @property
    def head_segment(self) -> Segment:
        assert 0 <= self.head < len(self.segments)  # noqa: S101
        return self.segments[self.head]

    @property
    def head_cell(self) -> Cell:
        return self.head_segment.cell

    @property
    def tail_cell(self) -> Cell:
        return self.segments[self.tail].cell

    def ordered(self) -> Iterator[Segment]:
        """Yield segments from tail to head."""
        n = len(self.segments)
        for i in range(1, n + 1):
            yield self.segments[(self.head + i) % n]

    def cells(self) -> list[Cell]:
        return [seg.cell for seg in self.ordered()]

    def collides(self, cell: Cell) -> bool:
        """Check whether moving the head onto *cell* hits the body.

        The tail cell is vacated on the same tick, so it never counts.
        """
        return cell in self.occupancy and cell != self.tail_cell

    def advance(self, cell: Cell) -> Cell:
        """Move the tail segment to *cell* as the new head.

        Returns the vacated cell.
        """
        self.head = self.tail
        seg = self.segments[self.head]
        vacated = seg.cell
        self.occupancy.discard(vacated)
        seg.cell = cell
        self.occupancy.add(cell)
        return vacated

    def grow(self, cell: Cell, handle: int) -> Segment:
        """Insert a new segment at *cell* immediately behind the tail."""
        # Inserting right after the head keeps the head index valid and
        # places the new segment between head and tail in ring order.
        seg = Segment(cell, handle)
        self.segments.insert(self.head + 1, seg)
        self.occupancy.add(cell)
        return seg

    def reset(self, cells: Sequence[Cell]) -> list[Segment]:
        """Truncate to ``len(cells)`` segments laid out on *cells*.

        Returns the removed segments so their handles can be released.
        """
        keep = len(cells)
        assert 0 < keep <= len(self.segments)  # noqa: S101
        removed = self.segments[keep:]
        del self.segments[keep:]
        self.occupancy.clear()
        for seg, cell in zip(self.segments, cells, strict=True):
            seg.cell = cell
            self.occupancy.add(cell)
        self.head = keep - 1
        return removed

    def to_dict(self) -> dict:
        """Serialize body state (tail first) to a dictionary."""
        return {
            "cells": [list(c) for c in self.cells()],
            "length": len(self),
        }


class DirectionQueue:
    """FIFO of pending turns; the front is the direction being applied.

    The queue is never empty. New turns are queued only when they are a
    quarter turn from the most recently queued direction.
    """

    def __init__(self, initial: Direction = Direction.RIGHT) -> None:
        self._initial = initial
        self._queue: deque[Direction] = deque([initial])

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Direction]:
        return iter(self._queue)

    def current(self) -> Direction:
        assert self._queue  # noqa: S101
        return self._queue[0]

    @property
    def back(self) -> Direction:
        assert self._queue  # noqa: S101
        return self._queue[-1]

    def propose(self, direction: Direction) -> bool:
        """Queue *direction* if perpendicular to the back entry.

        Reversals and same-axis repeats are dropped. Returns whether the
        turn was accepted.
        """
        if not direction.is_perpendicular(self.back):
            return False
        self._queue.append(direction)
        return True

    def advance(self) -> None:
        """Consume the oldest pending turn, always keeping one entry."""
        if len(self._queue) > 1:
            self._queue.popleft()

    def reset(self) -> None:
        self._queue.clear()
        self._queue.append(self._initial)

    def to_list(self) -> list[str]:
        return [d.name.lower() for d in self._queue]
