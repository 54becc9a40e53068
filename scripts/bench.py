#!/usr/bin/env python3
# ruff: noqa: E402
"""Time engine searches over diagram files and print the results as JSON.

Each position is searched ``--iterations`` times at ``--depth``; node counts
are deterministic, so only the timings vary between iterations.
"""
from __future__ import annotations

import argparse
import json
import os
import platform
import sys
import time
from typing import Any, Dict, List, Tuple

# Ensure repo root (which contains `src/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from src.engine.board import Board, ParseError
from src.search.service import DEFAULT_CONFIG, SearchService


def load_positions(paths: List[str]) -> List[Tuple[str, Board]]:
    if not paths:
        return [("startpos", Board.startpos())]
    positions = []
    for path in paths:
        name = os.path.splitext(os.path.basename(path))[0]
        try:
            positions.append((name, Board.from_file(path)))
        except (OSError, ParseError) as e:
            raise SystemExit(f"cannot load {path}: {e}")
    return positions


def bench_position(svc: SearchService, board: Board, depth: int, iterations: int) -> Dict[str, Any]:
    timings = []
    for _ in range(iterations):
        res = svc.search(board, depth=depth)
        timings.append(res.time_ms)
    best_ms = min(timings)
    return {
        "depth": res.depth,
        "best_move": None if res.best_move.is_null else res.best_move.to_algebraic(),
        "value": res.value,
        "best_line": [str(m) for m in res.best_line[1:]],
        "nodes": res.nodes,
        "best_ms": best_ms,
        "mean_ms": sum(timings) // len(timings),
        "nps": res.nodes * 1000 // max(1, best_ms),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Time engine searches over diagram files")
    parser.add_argument("positions", nargs="*", help="diagram files (default: start position)")
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_CONFIG.max_plies,
        choices=range(1, DEFAULT_CONFIG.max_plies + 1),
    )
    parser.add_argument("--iterations", type=int, default=3)
    parser.add_argument("--pretty", action="store_true", help="indent the JSON output")
    args = parser.parse_args()

    svc = SearchService()
    results = {}
    for name, board in load_positions(args.positions):
        results[name] = bench_position(svc, board, args.depth, max(1, args.iterations))
        sys.stderr.write(f"{name}: {results[name]['nodes']} nodes, {results[name]['best_ms']} ms\n")

    payload = {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "results": results,
    }
    print(json.dumps(payload, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
