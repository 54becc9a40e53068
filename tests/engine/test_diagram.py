from __future__ import annotations

import pytest

from src.engine.board import Board, ParseError
from src.engine.piece import BLACK, KING, PAWN, QUEEN, ROOK, WHITE


def _trim(text: str) -> str:
    return "\n".join(line.strip() for line in text.strip("\n").split("\n"))


def test_startpos_layout() -> None:
    b = Board.startpos()
    assert b.squares[0].kind == ROOK and b.squares[0].side == WHITE
    assert b.squares[4].kind == KING and b.squares[3].kind == QUEEN
    for sq in range(8, 16):
        assert b.squares[sq].kind == PAWN
        assert b.squares[sq].side == WHITE
        assert b.squares[sq].has_moved is False
    for sq in range(48, 56):
        assert b.squares[sq].kind == PAWN
        assert b.squares[sq].side == BLACK
    assert b.squares[63].kind == ROOK and b.squares[63].side == BLACK
    assert all(b.squares[sq].is_empty for sq in range(16, 48))
    assert b.side_to_move == BLACK
    assert b.ply == 0


def test_startpos_renders_diagram(start_diagram: str) -> None:
    assert _trim(Board.startpos().to_diagram()) == _trim(start_diagram)
    assert str(Board.startpos()) == Board.startpos().to_diagram()


def test_empty_squares_alternate_like_a_checkerboard() -> None:
    lines = Board.startpos().to_diagram().split("\n")
    # rank 6 starts on a light square (file a + rank index 5 is odd)
    assert lines[3] == "6:  ·  -  ·  -  ·  -  ·  - "
    assert lines[4] == "5:  -  ·  -  ·  -  ·  -  · "


def test_parse_startpos_matches_constructor(start_diagram: str) -> None:
    assert Board.from_diagram(start_diagram).squares == Board.startpos().squares


@pytest.mark.parametrize("fixture_name", ["midgame_diagram", "check_diagram", "mate_diagram"])
def test_round_trip_various_positions(fixture_name: str, request: pytest.FixtureRequest) -> None:
    text = request.getfixturevalue(fixture_name)
    assert _trim(Board.from_diagram(text).to_diagram()) == _trim(text)


@pytest.mark.parametrize(
    "fixture_name", ["start_diagram", "midgame_diagram", "check_diagram", "mate_diagram"]
)
def test_fixture_empty_glyphs_follow_checkerboard(
    fixture_name: str, request: pytest.FixtureRequest
) -> None:
    rows = request.getfixturevalue(fixture_name).split("\n")[1:]
    for row in rows:
        rank_idx = int(row[0]) - 1
        cells = row[3:].ljust(24)
        for file_idx in range(8):
            cell = cells[file_idx * 3 : file_idx * 3 + 3]
            if cell.strip() in ("·", "-"):
                expected = " · " if (file_idx + rank_idx) & 1 else " - "
                assert cell == expected, f"{row!r} file {file_idx}"


def test_parse_accepts_any_empty_glyph_and_no_header() -> None:
    text = "\n".join(
        [
            "8: {K} . . . . . . .",
            "7: - - - - - - - -",
            "6: · · · · · · · ·",
            "5: . . . . . . . .",
            "4: . . . . . . . .",
            "3: . . . . . . . .",
            "2: . . . . . . . .",
            "1: . . . . . . . K",
        ]
    )
    b = Board.from_diagram(text)
    assert b.squares[56].kind == KING and b.squares[56].side == BLACK
    assert b.squares[7].kind == KING and b.squares[7].side == WHITE
    assert sum(not p.is_empty for p in b.squares) == 2


def test_pawns_off_home_rank_are_marked_moved(midgame_diagram: str) -> None:
    b = Board.from_diagram(midgame_diagram)
    # White pawn h4, Black pawns a7 (home) and a6, e4 (advanced)
    assert b.squares[31].kind == PAWN and b.squares[31].has_moved is True
    assert b.squares[48].kind == PAWN and b.squares[48].has_moved is False
    assert b.squares[40].has_moved is True
    assert b.squares[28].side == BLACK and b.squares[28].has_moved is True


def test_from_file(tmp_path, midgame_diagram: str) -> None:
    path = tmp_path / "pos.txt"
    path.write_text(midgame_diagram, encoding="utf-8")
    assert Board.from_file(str(path)).squares == Board.from_diagram(midgame_diagram).squares


@pytest.mark.parametrize(
    "line,message",
    [
        ("9:  ·  -  ·  -  ·  -  ·  -", "row 9 out of range"),
        ("0:  ·  -  ·  -  ·  -  ·  -", "row 0 out of range"),
        ("5:  -  ·  -  ·  -  ·  -", "row 5: wrong number of columns 7"),
        ("5:  -  ·  -  ·  -  ·  -  ·  -", "row 5: wrong number of columns 9"),
        ("5:  -  ·  -  X  -  ·  -  ·", "bad piece 'X'"),
        ("5:  -  ·  - {Z} -  ·  -  ·", "bad piece 'Z'"),
    ],
)
def test_invalid_row_raises(start_diagram: str, line: str, message: str) -> None:
    rows = start_diagram.split("\n")
    rows[4] = line  # replaces rank 5
    with pytest.raises(ParseError) as info:
        Board.from_diagram("\n".join(rows))
    assert str(info.value) == message


def test_missing_row_raises(start_diagram: str) -> None:
    rows = start_diagram.split("\n")
    del rows[4]
    with pytest.raises(ParseError, match="expected 8 rows, got 7"):
        Board.from_diagram("\n".join(rows))


def test_repeated_row_raises(start_diagram: str) -> None:
    rows = start_diagram.split("\n")
    rows[4] = rows[3].replace("6:", "4:")
    with pytest.raises(ParseError, match="row 4 given twice"):
        Board.from_diagram("\n".join(rows))


def test_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Board.from_diagram("")
