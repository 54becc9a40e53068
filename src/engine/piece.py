from __future__ import annotations

from dataclasses import dataclass, replace


WHITE = "w"
BLACK = "b"

PAWN, BISHOP, KNIGHT, ROOK, QUEEN, KING = "P", "B", "N", "R", "Q", "K"
EMPTY = "."
PIECE_KINDS = PAWN + BISHOP + KNIGHT + ROOK + QUEEN + KING


def opponent(side: str) -> str:
    return BLACK if side == WHITE else WHITE


@dataclass(frozen=True)
class Piece:
    """Occupant of a single square.

    Attributes:
        kind (str): One of ``PBNRQK``, or ``"."`` for an empty square.
        side (str): ``"w"`` or ``"b"``; meaningless for empty squares.
        has_moved (bool): Whether a pawn has left its home rank. Stored for
            every piece but only consulted for pawns.
    """

    kind: str = EMPTY
    side: str = WHITE
    has_moved: bool = False

    @property
    def is_empty(self) -> bool:
        return self.kind == EMPTY

    def moved(self) -> "Piece":
        return self if self.has_moved else replace(self, has_moved=True)

    def cell(self) -> str:
        """Three-character diagram cell: `` P `` for White, ``{P}`` for Black."""
        if self.side == WHITE:
            return f" {self.kind} "
        return "{" + self.kind + "}"

    def __str__(self) -> str:
        return self.cell()


EMPTY_SQUARE = Piece()
