"""Headless frame driver for scripted or random play."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from grace_snake.engine import GameEngine
from grace_snake.presentation import Key

logger = logging.getLogger(__name__)

_AUTOPLAY_KEYS: tuple[Key, ...] = (Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT)


@dataclass
class SimulationResult:
    """Outcome of a headless run."""

    frames: int
    steps: int
    deaths: int
    final_score: int
    best_score: int
    wall_time_seconds: float

    def summary(self) -> str:
        return (
            f"Simulation: {self.frames} frames, {self.steps} steps, "
            f"{self.deaths} death(s) | score {self.final_score} "
            f"(best {self.best_score}) in {self.wall_time_seconds:.2f}s"
        )


def run_headless(
    engine: GameEngine,
    *,
    frames: int,
    frame_rate: int = 60,
    script: Mapping[int, set[Key]] | None = None,
    autoplay_rng: np.random.Generator | None = None,
    turn_probability: float = 0.1,
) -> SimulationResult:
    """Feed *frames* fixed-length frames to *engine*.

    Key presses come from *script* (frame index to keys) and, when
    *autoplay_rng* is given, from random arrow presses on some frames.
    """
    if frames < 0:
        raise ValueError("frames must be >= 0.")
    if frame_rate < 1:
        raise ValueError("frame_rate must be at least 1.")
    script = script or {}
    delta = 1.0 / frame_rate

    steps = 0
    best = engine.score
    start = time.perf_counter()
    for frame in range(frames):
        pressed = set(script.get(frame, ()))
        if autoplay_rng is not None and autoplay_rng.random() < turn_probability:
            idx = int(autoplay_rng.integers(len(_AUTOPLAY_KEYS)))
            pressed.add(_AUTOPLAY_KEYS[idx])
        if engine.update(pressed, delta):
            steps += 1
            best = max(best, engine.score)

    result = SimulationResult(
        frames=frames,
        steps=steps,
        deaths=engine.deaths,
        final_score=engine.score,
        best_score=best,
        wall_time_seconds=time.perf_counter() - start,
    )
    logger.info("%s", result.summary())
    return result
