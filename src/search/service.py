from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from src.engine.board import Board
from src.engine.move import Move, NO_MOVE, NULL_MOVE
from src.engine.movegen import generate_targets
from src.engine.piece import EMPTY_SQUARE, Piece, opponent
from src.eval import capture_value, positional_bonus


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchConfig:
    """Fixed search parameters.

    Attributes:
        max_plies (int): Deepest allowed search and length of the best line.
        reply_discount (float): Weight of the opponent's best reply when it is
            subtracted from a move's own value.
    """

    max_plies: int = 4
    reply_discount: float = 0.9


DEFAULT_CONFIG = SearchConfig()


@dataclass
class SearchResult:
    best_move: Move
    best_line: List[Move]
    nodes: int
    depth: int
    time_ms: int

    @property
    def value(self) -> float:
        return self.best_move.value


class SearchService:
    """Exhaustive fixed-depth search without pruning.

    Every node scans the 64 squares in index order, tries every generated
    destination of every piece of the side to move, and scores each one as
    ``capture - discount * opponent_best_reply + positional_bonus``. The
    first move found with the highest score wins.
    """

    def __init__(self, config: SearchConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def search(self, board: Board, depth: Optional[int] = None) -> SearchResult:
        """Find the best move for ``board.side_to_move``.

        Args:
            board (Board): Root position; never modified.
            depth (Optional[int]): Plies to look ahead, ``1..max_plies``.
                Defaults to ``config.max_plies``.

        Returns:
            SearchResult: Best move (``NO_MOVE`` when the side has no move at
                all), the best line indexed by ply (index 0 is never set), and
                node/time statistics.

        Raises:
            ValueError: If ``depth`` is outside ``1..max_plies``.
        """
        if depth is None:
            depth = self.config.max_plies
        if depth < 1 or depth > self.config.max_plies:
            raise ValueError(f"depth must be in 1..{self.config.max_plies}, got {depth}")

        discount = self.config.reply_discount
        trace = logger.isEnabledFor(logging.DEBUG)
        nodes = 0

        def visit(
            parent: Sequence[Piece], mover: str, ply: int, inherited: List[Move]
        ) -> Tuple[Move, List[Move]]:
            # Fork: this node works on its own copy of the squares and line
            nonlocal nodes
            nodes += 1
            squares = list(parent)
            line = list(inherited)
            best = NO_MOVE
            leaf = ply >= depth
            reply_side = opponent(mover)

            for from_sq in range(64):
                piece = squares[from_sq]
                if piece.is_empty or piece.side != mover:
                    continue
                # Lift the piece so rays see an empty origin
                squares[from_sq] = EMPTY_SQUARE
                try:
                    for target in generate_targets(squares, from_sq, piece):
                        to_sq = target.to_sq
                        occupant = squares[to_sq]
                        value = capture_value(occupant)
                        child_line: Optional[List[Move]] = None
                        if not leaf:
                            squares[to_sq] = piece.moved()
                            try:
                                reply, child_line = visit(squares, reply_side, ply + 1, line)
                            finally:
                                squares[to_sq] = occupant
                            value -= discount * reply.value
                        value += positional_bonus(to_sq)

                        if value > best.value:
                            best = Move(from_sq, to_sq, piece, value)
                            if child_line is not None:
                                line = child_line
                                line[ply] = best
                                if trace:
                                    logger.debug(
                                        "ply=%d line: %s", ply, "; ".join(str(m) for m in line)
                                    )
                finally:
                    squares[from_sq] = piece
                if trace:
                    logger.debug("%s=> %s", "." * ply, best)
            return best, line

        start = time.perf_counter()
        root_line = [NULL_MOVE] * self.config.max_plies
        best, line = visit(board.squares, board.side_to_move, board.ply + 1, root_line)
        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search depth=%d nodes=%d time_ms=%d best=%s", depth, nodes, time_ms, best
        )
        return SearchResult(best_move=best, best_line=line, nodes=nodes, depth=depth, time_ms=time_ms)


def find_best_move(
    board: Board, depth: Optional[int] = None, config: SearchConfig = DEFAULT_CONFIG
) -> Tuple[Move, List[Move]]:
    """Return ``(best_move, best_line)`` for ``board``; see :meth:`SearchService.search`."""
    res = SearchService(config).search(board, depth)
    return res.best_move, res.best_line


def apply_move(board: Board, move: Move) -> Board:
    """Return a copy of ``board`` with ``move`` committed."""
    return board.apply(move)
