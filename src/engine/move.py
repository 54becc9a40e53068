from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .piece import Piece


# Two squares separated by anything that is not itself a square token
HUMAN_MOVE_RE = re.compile(r"([a-h])([1-8])[^a-h1-8]+([a-h])([1-8])")
USAGE_MESSAGE = "? Expected a pair of coordinates. Type 'q' to quit."


class InputFormatError(ValueError):
    """Human move text is malformed or names a square the human does not own."""


@dataclass(frozen=True)
class Move:
    """A move of ``piece`` from ``from_sq`` to ``to_sq``.

    Attributes:
        from_sq (int): Origin square index (0-based, a1=0).
        to_sq (int): Destination square index.
        piece (Optional[Piece]): Snapshot of the moving piece; ``None`` marks
            a null move (a placeholder with no piece behind it).
        value (float): Search score of the move, from the mover's view.
    """

    from_sq: int = 0
    to_sq: int = 0
    piece: Optional[Piece] = None
    value: float = 0.0

    @property
    def is_null(self) -> bool:
        return self.piece is None

    def to_algebraic(self) -> str:
        """Return the squares of the move as ``"e2e4"``."""
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)

    def __str__(self) -> str:
        if self.piece is None:
            return "-"
        text = f"{self.piece} {square_to_str(self.from_sq)} {square_to_str(self.to_sq)}"
        if self.value == 0.0:
            return text
        return f"{text} {format_value(self.value)}"


# Running best move of a fresh search node
NO_MOVE: Move = Move(value=-9999.0)
# Unset best-line entry
NULL_MOVE: Move = Move()


def format_value(value: float) -> str:
    """Format a score with at most two fraction digits, e.g. ``0.05``, ``3.4``, ``-899``."""
    text = f"{value:.2f}"
    return text.rstrip("0").rstrip(".")


def parse_human_move(text: str) -> Move:
    """Parse free text naming two squares, such as ``"e2 e4"`` or ``"e2-e4"``.

    Args:
        text (str): Raw input line.

    Returns:
        Move: Null-piece move between the two squares; ownership is checked by
            the caller, which knows the board.

    Raises:
        InputFormatError: If ``text`` does not consist of exactly two squares
            separated by non-square characters.
    """
    m = HUMAN_MOVE_RE.fullmatch(text.strip())
    if m is None:
        raise InputFormatError(USAGE_MESSAGE)
    from_sq = str_to_square(m.group(1) + m.group(2))
    to_sq = str_to_square(m.group(3) + m.group(4))
    return Move(from_sq, to_sq)


def str_to_square(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        int: Zero-based square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return (int(s[1]) - 1) * 8 + ord(s[0]) - ord("a")


def square_to_str(idx: int) -> str:
    if idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    return "abcdefgh"[idx % 8] + str(idx // 8 + 1)
