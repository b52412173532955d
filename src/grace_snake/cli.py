"""Command-line tools for running the game headless."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grace-snake",
        description="Grace Snake headless simulation and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run the game without a display.")
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--frames", type=int, default=600)
    sim_p.add_argument("--frame-rate", type=int, default=60)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--script", type=str, default=None,
        help='JSON file mapping frame index to key names, e.g. {"10": ["w"]}.',
    )
    sim_p.add_argument(
        "--autoplay", action="store_true",
        help="Press random arrow keys on some frames.",
    )

    # --- write-config ---
    cfg_p = sub.add_parser(
        "write-config", help="Write a config file with default values.",
    )
    cfg_p.add_argument("output", help="Destination JSON path.")
    cfg_p.add_argument("--board-size", type=int, default=None)
    cfg_p.add_argument("--speed-ms", type=int, default=None)

    return parser


def _load_script(path: str) -> dict:
    from grace_snake.presentation import parse_key

    raw = json.loads(Path(path).read_text())
    if not isinstance(raw, dict):
        raise ValueError("Key script must be a JSON object.")
    script: dict = {}
    for frame, names in raw.items():
        if not isinstance(names, list) or not all(
            isinstance(n, str) for n in names
        ):
            raise ValueError(f"Script entry {frame!r} must be a list of keys.")
        try:
            index = int(frame)
        except ValueError:
            raise ValueError(f"Script frame {frame!r} is not an integer.") from None
        keys = {parse_key(n) for n in names}
        keys.discard(None)
        script[index] = keys
    return script


def _run_simulate(args: argparse.Namespace) -> int:
    import numpy as np

    from grace_snake.config import GameConfig
    from grace_snake.engine import GameEngine
    from grace_snake.headless import run_headless

    config = GameConfig.load(args.config) if args.config else GameConfig()
    engine = GameEngine(config, seed=args.seed)
    script = _load_script(args.script) if args.script else None
    rng = np.random.default_rng(args.seed) if args.autoplay else None

    result = run_headless(
        engine,
        frames=args.frames,
        frame_rate=args.frame_rate,
        script=script,
        autoplay_rng=rng,
    )
    print(result.summary())  # noqa: T201
    state = engine.get_state()
    state.pop("scene")
    print(json.dumps(state, indent=2))  # noqa: T201
    return 0


def _run_write_config(args: argparse.Namespace) -> int:
    from grace_snake.config import GameConfig

    overrides: dict = {}
    if args.board_size is not None:
        overrides["board_size"] = args.board_size
    if args.speed_ms is not None:
        overrides["speed_ms"] = args.speed_ms
    config = GameConfig(**overrides)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grace-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "write-config": _run_write_config,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
