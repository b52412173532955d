"""Frame-driven game engine composing body, direction input, and scheduler."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from grace_snake.config import GameConfig
from grace_snake.grid import Anchor, Cell, Direction, move, random_cell, to_anchor
from grace_snake.presentation import Key, NodeKind, Scene
from grace_snake.scheduler import TickScheduler
from grace_snake.snake import Body, DirectionQueue, Segment
from grace_snake.state import ALIVE, DEAD, FORGIVE, Phase, SnakeState

logger = logging.getLogger(__name__)

FOOD_DEPTH = 1.0
BODY_DEPTH = 2.0

_VERTICAL_KEYS: dict[Direction, tuple[Key, ...]] = {
    Direction.UP: (Key.UP, Key.W),
    Direction.DOWN: (Key.DOWN, Key.S),
}
_HORIZONTAL_KEYS: dict[Direction, tuple[Key, ...]] = {
    Direction.LEFT: (Key.LEFT, Key.A),
    Direction.RIGHT: (Key.RIGHT, Key.D),
}


def proposal_from_keys(
    pressed: set[Key], back: Direction,
) -> Direction | None:
    """Pick the quarter turn requested by *pressed*, relative to *back*.

    Only keys on the axis perpendicular to *back* are considered, and
    opposite keys pressed in the same frame cancel out.
    """
    candidates = _HORIZONTAL_KEYS if back.is_vertical else _VERTICAL_KEYS
    chosen = [
        direction for direction, keys in candidates.items()
        if any(k in pressed for k in keys)
    ]
    if len(chosen) != 1:
        return None
    return chosen[0]


class GameEngine:
    """Single-player, frame-driven snake engine.

    The engine owns the body ring, direction queue, life-cycle state,
    scheduler and food. The host calls :meth:`update` once per frame with
    the keys pressed during that frame and the elapsed time; the engine
    runs :meth:`step` whenever the scheduler fires and pushes anchors and
    text back to the :class:`Scene` through the handles it was given.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        scene: Scene | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.scene = scene if scene is not None else Scene()
        self.rng = np.random.default_rng(
            seed if seed is not None else self.config.seed,
        )

        cfg = self.config
        self.score_text = self.scene.spawn(
            NodeKind.TEXT, (0.0, 0.0, 0.0), text="Score: 0",
        )
        segments = [
            Segment(
                cell,
                self.scene.spawn(NodeKind.SEGMENT, self._anchor(cell, BODY_DEPTH)),
            )
            for cell in cfg.default_body_cells
        ]
        self.body = Body(segments, cfg.board_size)

        self.food = cfg.default_food_cell
        self.food_handle = self.scene.spawn(
            NodeKind.FOOD, self._anchor(self.food, FOOD_DEPTH),
        )

        self.directions = DirectionQueue(Direction.RIGHT)
        # A fresh game waits out one death pause before the first move.
        self.state: SnakeState = DEAD
        self.scheduler = TickScheduler(cfg.death_time)
        self.tick = 0
        self.deaths = 0

    @property
    def score(self) -> int:
        return len(self.body) - self.config.init_length

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def update(self, pressed: Iterable[Key], delta: float) -> bool:
        """Process one host frame.

        Returns ``True`` when the scheduler fired and a step ran.
        """
        keys = set(pressed)
        if Key.SPACE in keys:
            if self.state.is_paused:
                self.state = self.state.resume()
                logger.debug("Resumed in %s.", self.state.phase.value)
            else:
                self.state = self.state.pause()
                logger.debug("Paused.")
                return False
        elif self.state.is_paused:
            return False

        self.scheduler.tick(delta)

        if self.state.accepts_turns:
            proposal = proposal_from_keys(keys, self.directions.back)
            if proposal is not None:
                self.turn(proposal)

        if self.scheduler.finished:
            self.step()
            return True
        return False

    def toggle_pause(self) -> None:
        self.state = self.state.toggle_pause()

    def turn(self, direction: Direction) -> bool:
        """Queue a turn; returns whether it was accepted.

        While being forgiven, an accepted turn fires the scheduler at once
        so the correction applies on this frame.
        """
        if not self.state.accepts_turns:
            return False
        if not self.directions.propose(direction):
            return False
        if self.state.phase is Phase.FORGIVE:
            self.scheduler.force_fire()
        return True

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(self) -> None:
        """Run one scheduler firing.

        The score text is written after growth, so on the tick the food is
        eaten it already shows the new score.
        """
        assert not self.state.is_paused  # noqa: S101
        cfg = self.config
        self.scheduler.set_duration(cfg.speed)
        self.directions.advance()
        direction = self.directions.current()

        candidate, hit_wall = move(self.body.head_cell, direction, cfg.board_size)
        if hit_wall or self.body.collides(candidate):
            self._collide(candidate, hit_wall)
            return

        vacated = self.body.advance(candidate)
        self.scene.place(
            self.body.head_segment.handle, self._anchor(candidate, BODY_DEPTH),
        )

        if candidate == self.food:
            self._grow(vacated)
            self._relocate_food()
            self.scheduler.set_duration(cfg.food_break)

        self.scene.set_text(self.score_text, f"Score: {self.score}")
        self.state = ALIVE
        self.tick += 1

    def _collide(self, candidate: Cell, hit_wall: bool) -> None:
        if self.state.phase is Phase.FORGIVE:
            self._die()
            return
        logger.debug(
            "Collision at %s (wall=%s); forgiving.", tuple(candidate), hit_wall,
        )
        self.scheduler.set_duration(self.config.forgiveness_break)
        self.scheduler.reset()
        self.state = FORGIVE

    def _grow(self, cell: Cell) -> None:
        handle = self.scene.spawn(
            NodeKind.SEGMENT, self._anchor(cell, BODY_DEPTH),
        )
        self.body.grow(cell, handle)

    def _relocate_food(self) -> None:
        occupancy = self.body.occupancy
        if occupancy.is_full:
            logger.warning("No free cells available for food placement.")
            return
        # Past half coverage, draw from the free cells instead of retrying.
        if 2 * len(occupancy) > self.config.board_size ** 2:
            free = occupancy.free_cells()
            self._place_food(free[int(self.rng.integers(len(free)))])
            return
        cell = random_cell(self.rng, self.config.board_size)
        while cell in occupancy:
            cell = random_cell(self.rng, self.config.board_size)
        self._place_food(cell)

    def _place_food(self, cell: Cell) -> None:
        self.food = cell
        self.scene.place(self.food_handle, self._anchor(cell, FOOD_DEPTH))

    def _die(self) -> None:
        """Report the score and put the board back to its starting layout."""
        cfg = self.config
        final_score = self.score
        self.scene.announce(f"Score: {final_score}")
        logger.info("Snake died at tick %d with score %d.", self.tick, final_score)
        self.deaths += 1

        self.scheduler.reset()
        self.scheduler.set_duration(cfg.death_time)
        self.directions.reset()

        for seg in self.body.reset(cfg.default_body_cells):
            self.scene.despawn(seg.handle)
        for seg in self.body.segments:
            self.scene.place(seg.handle, self._anchor(seg.cell, BODY_DEPTH))

        self._place_food(cfg.default_food_cell)
        self.state = DEAD

    def _anchor(self, cell: Cell, depth: float) -> Anchor:
        return to_anchor(cell, depth, self.config.board_size, self.config.cell_size)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "deaths": self.deaths,
            "state": self.state.to_dict(),
            "body": self.body.to_dict(),
            "head": list(self.body.head_cell),
            "food": list(self.food),
            "directions": self.directions.to_list(),
            "scheduler": self.scheduler.to_dict(),
            "scene": self.scene.snapshot(),
        }
