"""Command-line launcher for the Neon Snake service."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from neon_snake.settings import GRID_SIZES, SPEED_PRESETS, Settings
from neon_snake.storage import DEFAULT_DATA_DIR, JsonFileStore
from neon_snake.themes import THEMES

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neon-snake",
        description="Neon Snake game service and settings tools.",
    )
    parser.add_argument(
        "--data-dir", type=str, default=str(DEFAULT_DATA_DIR),
        help="Directory holding the persisted best score and settings.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket service.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument("--log-level", type=str, default="info")

    # --- settings ---
    settings_p = sub.add_parser(
        "settings", help="Show or change the persisted settings.",
    )
    settings_p.add_argument(
        "--grid-size", type=int, default=None, choices=list(GRID_SIZES),
    )
    settings_p.add_argument(
        "--speed", type=str, default=None, choices=sorted(SPEED_PRESETS),
    )
    settings_p.add_argument(
        "--theme", type=str, default=None, choices=sorted(THEMES),
    )

    # --- score ---
    score_p = sub.add_parser("score", help="Show the persisted best score.")
    score_p.add_argument(
        "--reset", action="store_true", help="Reset the best score to 0.",
    )

    return parser


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from neon_snake.server.app import create_app

    app = create_app(args.data_dir)
    logger.info(
        "Serving on http://%s:%d (data in %s).",
        args.host, args.port, args.data_dir,
    )
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)
    return 0


def _run_settings(args: argparse.Namespace) -> int:
    store = JsonFileStore(args.data_dir)
    settings = store.load_settings()

    overrides = {
        name: getattr(args, name)
        for name in ("grid_size", "speed", "theme")
        if getattr(args, name) is not None
    }
    if overrides:
        d = settings.to_dict()
        d.update(overrides)
        settings = Settings.sanitize(d)
        store.save_settings(settings)

    print(json.dumps(settings.to_dict(), indent=2))  # noqa: T201
    return 0


def _run_score(args: argparse.Namespace) -> int:
    store = JsonFileStore(args.data_dir)
    if args.reset:
        store.save_best_score(0)
    print(f"Best score: {store.load_best_score()}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``neon-snake`` CLI."""
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
        "serve": _run_serve,
        "settings": _run_settings,
        "score": _run_score,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
