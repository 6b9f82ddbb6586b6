"""Entry point: ``python -m gridchase`` or the ``gridchase`` console script.

Supports two modes:
  - ``gridchase serve``    → FastAPI server hosting a live game
  - ``gridchase cli``      → Headless run with scripted or random input
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--variant", type=str, default="meadow", choices=["meadow", "maze"])
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--width", type=int, default=None, help="Grid columns (meadow only)")
    parser.add_argument("--height", type=int, default=None, help="Grid rows (meadow only)")
    parser.add_argument("--performance", action="store_true", help="Use the slower tick interval")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid chase game engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--autostart", action="store_true", help="Start the game as soon as the server is up")
    _add_common(srv)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless game")
    cli.add_argument("--ticks", type=int, default=2000)
    cli.add_argument("--input", type=str, default="random", choices=["none", "random", "replay"],
                     help="Where direction requests come from")
    cli.add_argument("--replay-in", type=str, default=None, help="Replay file to take inputs from")
    cli.add_argument("--replay", type=str, default="replay.json", help="Replay file to write")
    _add_common(cli)

    return parser


def _config_from_args(args: argparse.Namespace):
    from gridchase.config import GameConfig

    overrides = dict(
        world_seed=args.seed,
        performance_mode=args.performance,
        log_level=args.log_level,
    )
    if getattr(args, "replay", None):
        overrides["replay_file"] = args.replay
    if getattr(args, "ticks", None):
        overrides["max_ticks"] = args.ticks
    config = GameConfig.for_variant(args.variant, **overrides)
    if args.width or args.height:
        config = config.with_grid(args.width or config.grid_width, args.height or config.grid_height)
    return config


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from gridchase.api.app import create_app

    config = _config_from_args(args)
    app = create_app(config, autostart=args.autostart)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _random_inputs(seed: int, every: int = 4):
    from gridchase.core.enums import Direction, Domain
    from gridchase.systems.rng import DeterministicRNG

    rng = DeterministicRNG(seed)
    options = list(Direction)

    def pick(tick: int):
        if tick % every:
            return None
        return rng.choice(Domain.AI_DECISION, -1, tick, options)

    return pick


def _replay_inputs(args: argparse.Namespace):
    """Inputs of the replay file named by ``--replay-in``.

    The run must use the seed and variant the replay was recorded with, so
    those are taken from the file and override the command line.
    """
    from gridchase.utils.replay import load_replay

    replay = load_replay(args.replay_in)
    seed = int(replay["seed"])
    variant = str(replay.get("variant", args.variant)).lower()
    if (seed, variant) != (args.seed, args.variant):
        logger.warning("Replay %s was recorded with seed %d (%s); overriding seed %d (%s)",
                       args.replay_in, seed, variant, args.seed, args.variant)
    args.seed = seed
    args.variant = variant
    by_tick = {t["tick"]: t["input"] for t in replay["ticks"]}
    return by_tick.get


def _run_cli(args: argparse.Namespace) -> None:
    from gridchase.engine.game_loop import GameLoop
    from gridchase.engine.scoring import rank_for_score
    from gridchase.systems.rng import DeterministicRNG
    from gridchase.utils.logging import setup_logging
    from gridchase.utils.replay import ReplayRecorder

    setup_logging(args.log_level)

    inputs = None
    if args.input == "replay":
        if not args.replay_in:
            raise SystemExit("--input replay requires --replay-in PATH")
        inputs = _replay_inputs(args)

    config = _config_from_args(args)
    if args.input == "random":
        inputs = _random_inputs(config.world_seed + 1)

    recorder = ReplayRecorder(config.replay_file, config.world_seed, config.variant.name.lower())
    loop = GameLoop(config, rng=DeterministicRNG(config.world_seed), recorder=recorder)
    loop.run(max_ticks=config.max_ticks, inputs=inputs)

    run = loop.state.run
    logger.info("Final score %d (%s), level %d, outcome %s",
                run.score, rank_for_score(run.score), run.level, run.outcome.name.lower())
    logger.info("Done. Replay written to %s", config.replay_file)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
