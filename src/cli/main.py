from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from src.engine.game import Game
from src.protocol.console.loop import ConsoleSession
from src.search.service import DEFAULT_CONFIG


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minichess", description="Play White against a fixed-depth search engine"
    )
    parser.add_argument("position", nargs="?", help="diagram file with the starting position")
    parser.add_argument(
        "-t",
        "--test",
        action="store_true",
        help="play the scripted move a2 a4, print one engine reply and exit",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_CONFIG.max_plies,
        choices=range(1, DEFAULT_CONFIG.max_plies + 1),
        help=f"search depth in plies (default: {DEFAULT_CONFIG.max_plies})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for stderr diagnostics (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    session = ConsoleSession(Game.new(depth=args.depth), test_mode=args.test)
    if args.position:
        session.load_position(args.position)
    session.run()


def serve(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="minichess-serve", description="Run the HTTP API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    uvicorn.run("src.protocol.http.app:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
