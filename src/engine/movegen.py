"""Per-piece destination generation.

Geometry only: nothing here looks at check, pins, castling, promotion or
en passant. Every accepted destination is returned in the order the search
scans it, which decides ties between equally scored moves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final, List, Optional, Sequence, Tuple

from .board import Board
from .move import Move
from .piece import BISHOP, EMPTY_SQUARE, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE, Piece


MOVE_ONLY: Final = "move"
CAPTURE_ONLY: Final = "capture"
MOVE_OR_CAPTURE: Final = "move_or_capture"

KNIGHT_OFFSETS: Final = ((-1, -2), (-2, -1), (1, -2), (2, -1), (1, 2), (2, 1), (-1, 2), (-2, 1))
DIAGONALS: Final = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ORTHOGONALS: Final = ((-1, 0), (0, -1), (1, 0), (0, 1))

# (directions, max steps) for ray-moving pieces
RAYS: Final[Dict[str, Tuple[Sequence[Tuple[int, int]], int]]] = {
    BISHOP: (DIAGONALS, 8),
    ROOK: (ORTHOGONALS, 8),
    QUEEN: (DIAGONALS + ORTHOGONALS, 8),
    KING: (DIAGONALS + ORTHOGONALS, 1),
}


@dataclass(frozen=True)
class Target:
    """An accepted destination and the rule that admitted it."""

    to_sq: int
    kind: str


def _target(
    squares: Sequence[Piece], file_idx: int, rank_idx: int, side: str, kind: str
) -> Optional[Target]:
    """Classify one destination; ``None`` when it is rejected.

    Off-board squares and friendly pieces are always rejected. An opposing
    piece needs a capturing rule, an empty square a moving one.
    """
    if file_idx < 0 or rank_idx < 0 or file_idx >= 8 or rank_idx >= 8:
        return None
    to_sq = rank_idx * 8 + file_idx
    occupant = squares[to_sq]
    if occupant.is_empty:
        return None if kind == CAPTURE_ONLY else Target(to_sq, kind)
    if kind == MOVE_ONLY or occupant.side == side:
        return None
    return Target(to_sq, kind)


def generate_targets(squares: Sequence[Piece], from_sq: int, piece: Piece) -> List[Target]:
    """Enumerate the destinations of ``piece`` standing on ``from_sq``.

    Args:
        squares (Sequence[Piece]): Board squares. The origin is expected to
            be empty already (the searcher lifts the piece before asking).
        from_sq (int): Origin square index.
        piece (Piece): The moving piece.

    Returns:
        List[Target]: Accepted destinations in scan order: pawn advance(s)
            then diagonal captures; knight offsets in table order; rays in
            direction-table order, each ray walked outwards.
    """
    f, r = from_sq % 8, from_sq // 8
    side = piece.side
    targets: List[Target] = []

    if piece.kind == PAWN:
        adv = 1 if side == WHITE else -1
        one = _target(squares, f, r + adv, side, MOVE_ONLY)
        if one is not None:
            targets.append(one)
            if not piece.has_moved:
                two = _target(squares, f, r + 2 * adv, side, MOVE_ONLY)
                if two is not None:
                    targets.append(two)
        for df in (1, -1):
            cap = _target(squares, f + df, r + adv, side, CAPTURE_ONLY)
            if cap is not None:
                targets.append(cap)
        return targets

    if piece.kind == KNIGHT:
        for df, dr in KNIGHT_OFFSETS:
            t = _target(squares, f + df, r + dr, side, MOVE_OR_CAPTURE)
            if t is not None:
                targets.append(t)
        return targets

    directions, max_steps = RAYS[piece.kind]
    for df, dr in directions:
        tf, tr = f, r
        for _ in range(max_steps):
            tf += df
            tr += dr
            t = _target(squares, tf, tr, side, MOVE_OR_CAPTURE)
            if t is None:
                break
            targets.append(t)
            if not squares[t.to_sq].is_empty:
                break
    return targets


def candidate_moves(board: Board, side: str) -> List[Move]:
    """List every generable move of ``side`` on ``board`` in scan order."""
    squares = list(board.squares)
    moves: List[Move] = []
    for from_sq in range(64):
        piece = squares[from_sq]
        if piece.is_empty or piece.side != side:
            continue
        squares[from_sq] = EMPTY_SQUARE
        try:
            for t in generate_targets(squares, from_sq, piece):
                moves.append(Move(from_sq, t.to_sq, piece))
        finally:
            squares[from_sq] = piece
    return moves
