"""Entry point: ``python -m tag_arena``.

Supports two modes:
  - ``python -m tag_arena``        → Launch the FastAPI server for a presentation layer
  - ``python -m tag_arena cli``    → Headless match on a simulated clock
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

logger = logging.getLogger(__name__)

_MODES = ["single", "multi"]
_ROLES = ["chaser", "runner", "random"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tag Arena match simulator")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--fps", type=float, default=60.0)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run one headless match with an idle human agent")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--mode", type=str, default="multi", choices=_MODES)
    cli.add_argument("--role", type=str, default="random", choices=_ROLES)
    cli.add_argument("--duration", type=int, default=None, help="Override match length in seconds")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from tag_arena.api.app import create_app
    from tag_arena.config import SimulationConfig

    config = SimulationConfig(seed=args.seed, frame_rate=args.fps, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from tag_arena.config import SimulationConfig
    from tag_arena.engine.match_controller import MatchController
    from tag_arena.systems.rng import DeterministicRNG
    from tag_arena.utils.logging import setup_logging

    config = SimulationConfig(seed=args.seed, log_level=args.log_level)
    if args.duration is not None:
        config = replace(config, single_duration_s=args.duration, multi_duration_s=args.duration)

    setup_logging(config.log_level)

    controller = MatchController(config, DeterministicRNG(config.seed))
    state = controller.start_match(args.mode, args.role, now=0.0)

    now = 0.0
    next_clock_at = 1000.0
    while not state.ended:
        now += config.frame_ms
        controller.tick(now)
        while now >= next_clock_at and not state.ended:
            controller.clock_tick()
            next_clock_at += 1000.0
        for event in controller.drain_events():
            if event.category in ("tag", "safe_zone", "match"):
                logger.info("[%6d] %-9s %s", event.tick, event.category, event.message)

    snap = controller.snapshot()
    if snap is not None and snap.result is not None:
        logger.info("%s %s", snap.result.headline, snap.result.detail)
        for entry in snap.rankings:
            logger.info("  %d. %s - %s", entry.rank, entry.name, entry.status.value)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
