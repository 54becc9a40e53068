"""Move valuation: material captured plus a centralization bonus.

Pure, deterministic, and side-effect free. Scores are in pawns (floats),
from the point of view of the side making the move.
"""

from __future__ import annotations

from typing import Dict, Final

from src.engine.piece import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, Piece


PIECE_VALUES: Final[Dict[str, int]] = {
    PAWN: 1,
    BISHOP: 3,
    KNIGHT: 3,
    ROOK: 5,
    QUEEN: 10,
    KING: 1000,
}

CENTER_BONUS: Final = 0.8
CENTER_DECAY: Final = 0.1


def capture_value(occupant: Piece) -> float:
    """Material won by moving onto a square holding ``occupant`` (0 when empty)."""
    if occupant.is_empty:
        return 0.0
    return float(PIECE_VALUES[occupant.kind])


def positional_bonus(sq: int) -> float:
    # Manhattan distance from the board centre: corners get 0.1, the centre four 0.7
    x = sq % 8
    y = sq // 8
    return CENTER_BONUS - (abs(3.5 - x) + abs(3.5 - y)) * CENTER_DECAY
