from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

from .move import Move
from .piece import (
    BLACK,
    EMPTY_SQUARE,
    PAWN,
    PIECE_KINDS,
    WHITE,
    Piece,
)


BACK_RANK = "RNBQKBNR"
FILES_HEADER = "    a  b  c  d  e  f  g  h"

# Rank label followed by the row's cells, e.g. "7: {P}{P} ·  - ..."
_RANK_LINE_RE = re.compile(r"\s*(\d+):(.*)")
_CELL_RE = re.compile(r"\{[A-Z]\}|[A-Z]|[.·-]")
_EMPTY_CELLS = (".", "·", "-")


class ParseError(ValueError):
    """A position diagram could not be parsed."""


def _startpos_squares() -> List[Piece]:
    squares = [EMPTY_SQUARE] * 64
    for file_idx, kind in enumerate(BACK_RANK):
        squares[file_idx] = Piece(kind, WHITE)
        squares[8 + file_idx] = Piece(PAWN, WHITE)
        squares[48 + file_idx] = Piece(PAWN, BLACK)
        squares[56 + file_idx] = Piece(kind, BLACK)
    return squares


@dataclass
class Board:
    """Mailbox board: 64 squares plus the side a search from here moves.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from White's perspective.
    - ``side_to_move`` names the side whose pieces a search started from this
      board moves. The console game keeps it on Black (the engine) for the
      whole game; searches flip it on their own copies.
    - ``ply`` is 0 for a root board and grows by one per search level.
    """

    squares: List[Piece] = field(default_factory=_startpos_squares)
    side_to_move: str = BLACK
    ply: int = 0

    def __post_init__(self) -> None:
        if len(self.squares) != 64:
            raise ValueError(f"board needs 64 squares, got {len(self.squares)}")

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board holding the standard starting layout, Black to search."""
        return cls()

    @classmethod
    def from_diagram(cls, text: str, side_to_move: str = BLACK) -> "Board":
        """Parse a board diagram as produced by :meth:`to_diagram`.

        Args:
            text (str): Diagram text. Every line of the form ``"N: cells"``
                describes rank ``N``; other lines (such as the file header)
                are ignored.
            side_to_move (str): Side a search from the parsed board moves.

        Returns:
            Board: Parsed board. Pawns found off their home rank are marked
                as having moved.

        Raises:
            ParseError: If a rank label is out of range or repeated, a row
                does not have exactly 8 cells, a piece letter is unknown, or
                not all 8 ranks are present.
        """
        squares = [EMPTY_SQUARE] * 64
        seen: Dict[int, str] = {}
        for line in text.splitlines():
            m = _RANK_LINE_RE.match(line)
            if m is None:
                continue
            label = m.group(1)
            rank_idx = int(label) - 1
            if rank_idx < 0 or rank_idx > 7:
                raise ParseError(f"row {label} out of range")
            if rank_idx in seen:
                raise ParseError(f"row {label} given twice")
            seen[rank_idx] = label
            cells = _CELL_RE.findall(m.group(2))
            if len(cells) != 8:
                raise ParseError(f"row {rank_idx + 1}: wrong number of columns {len(cells)}")
            for file_idx, cell in enumerate(cells):
                squares[rank_idx * 8 + file_idx] = _parse_cell(cell, rank_idx)
        if len(seen) != 8:
            raise ParseError(f"expected 8 rows, got {len(seen)}")
        return cls(squares=squares, side_to_move=side_to_move)

    @classmethod
    def from_file(cls, path: str, side_to_move: str = BLACK) -> "Board":
        """Read and parse a diagram file.

        Raises:
            OSError: If the file cannot be read.
            ParseError: If its contents are not a valid diagram.
        """
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_diagram(f.read(), side_to_move=side_to_move)

    def to_diagram(self) -> str:
        """Render the board, rank 8 first, Black pieces in braces.

        Empty squares alternate ``·`` and ``-`` like a checkerboard.
        """
        rows = [FILES_HEADER]
        for rank_idx in range(7, -1, -1):
            cells = []
            for file_idx in range(8):
                piece = self.squares[rank_idx * 8 + file_idx]
                if piece.is_empty:
                    cells.append(" · " if (file_idx + rank_idx) & 1 else " - ")
                else:
                    cells.append(piece.cell())
            rows.append(f"{rank_idx + 1}: " + "".join(cells))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.to_diagram()

    def copy(self) -> "Board":
        return Board(squares=list(self.squares), side_to_move=self.side_to_move, ply=self.ply)

    def make_move(self, move: Move) -> Piece:
        """Commit ``move`` in place and return the piece it replaced.

        The origin occupant is copied to the destination and the origin is
        emptied. Captures are implicit. ``has_moved`` is left as it was.

        Raises:
            ValueError: If ``move`` is a null move.
        """
        if move.is_null:
            raise ValueError("cannot apply a null move")
        replaced = self.squares[move.to_sq]
        self.squares[move.to_sq] = self.squares[move.from_sq]
        self.squares[move.from_sq] = EMPTY_SQUARE
        return replaced

    def unmake_move(self, move: Move, replaced: Piece) -> None:
        """Reverse :meth:`make_move`, putting ``replaced`` back on the destination."""
        self.squares[move.from_sq] = self.squares[move.to_sq]
        self.squares[move.to_sq] = replaced

    def apply(self, move: Move) -> "Board":
        """Return a new board with ``move`` committed; ``self`` is unchanged."""
        child = self.copy()
        child.make_move(move)
        return child


def _parse_cell(cell: str, rank_idx: int) -> Piece:
    if cell in _EMPTY_CELLS:
        return EMPTY_SQUARE
    side = BLACK if cell[0] == "{" else WHITE
    kind = cell[1] if side == BLACK else cell[0]
    if kind not in PIECE_KINDS:
        raise ParseError(f"bad piece '{kind}'")
    home_rank = 1 if side == WHITE else 6
    return Piece(kind, side, has_moved=(kind == PAWN and rank_idx != home_rank))

