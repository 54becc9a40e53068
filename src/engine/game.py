from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board
from .move import InputFormatError, Move, parse_human_move, square_to_str
from .movegen import candidate_moves
from .piece import BLACK, WHITE, Piece
from src.search.service import SearchResult, SearchService


logger = logging.getLogger(__name__)

HUMAN_SIDE = WHITE
ENGINE_SIDE = BLACK

# A best reply worth more than this can only be a king capture
CHECK_THRESHOLD = 500.0
MATE_THRESHOLD = -500.0
# Best-line index holding the human's predicted answer to the engine's move
MATE_LINE_PLY = 2


@dataclass
class Game:
    """Human (White) versus engine (Black) around one persistent board.

    Responsibility: validate and apply human moves, run the engine's search
    and apply its answer, report the check / checkmate heuristics, undo.
    """

    board: Board
    service: SearchService = field(default_factory=SearchService)
    depth: Optional[int] = None
    move_stack: List[Tuple[Move, Piece]] = field(default_factory=list)
    last_result: Optional[SearchResult] = None

    @classmethod
    def new(cls, **kwargs) -> "Game":
        return cls(board=Board.startpos(), **kwargs)

    @classmethod
    def from_diagram(cls, text: str, **kwargs) -> "Game":
        return cls(board=Board.from_diagram(text, side_to_move=ENGINE_SIDE), **kwargs)

    def to_diagram(self) -> str:
        return self.board.to_diagram()

    def parse_human_move(self, text: str) -> Move:
        """Parse ``text`` and check that it moves one of the human's pieces.

        Raises:
            InputFormatError: On malformed text, or when the origin square is
                empty or holds an engine piece.
        """
        move = parse_human_move(text)
        piece = self.board.squares[move.from_sq]
        if piece.is_empty or piece.side != HUMAN_SIDE:
            raise InputFormatError(f"Not your piece at {square_to_str(move.from_sq)}")
        return Move(move.from_sq, move.to_sq, piece)

    def apply_move(self, move: Move) -> None:
        replaced = self.board.make_move(move)
        self.move_stack.append((move, replaced))

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        move, replaced = self.move_stack.pop()
        self.board.unmake_move(move, replaced)

    def search(self, depth: Optional[int] = None) -> SearchResult:
        """Search for the engine's best move without playing it."""
        return self.service.search(self.board, depth if depth is not None else self.depth)

    def engine_move(self) -> SearchResult:
        """Search at the game depth and play the engine's best move.

        When the engine has no move at all the sentinel result is returned
        and the board is left alone.
        """
        res = self.search()
        self.last_result = res
        if res.best_move.is_null:
            logger.info("engine has no move to play")
        else:
            self.apply_move(res.best_move)
        return res

    def in_check(self) -> bool:
        """Whether the engine's best immediate reply would capture the human king."""
        probe = self.service.search(self.board, 1)
        return probe.value > CHECK_THRESHOLD

    def is_checkmate(self, result: Optional[SearchResult] = None) -> bool:
        """Whether the human's best predicted answer to the engine's move is hopeless."""
        res = result if result is not None else self.last_result
        if res is None or len(res.best_line) <= MATE_LINE_PLY:
            return False
        return res.best_line[MATE_LINE_PLY].value < MATE_THRESHOLD

    def move_history(self) -> List[str]:
        return [m.to_algebraic() for m, _ in self.move_stack]

    def human_moves(self) -> List[Move]:
        return candidate_moves(self.board, HUMAN_SIDE)
