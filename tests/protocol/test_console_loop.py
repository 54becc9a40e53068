from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from src.engine.board import Board
from src.engine.game import Game
from src.engine.move import USAGE_MESSAGE, str_to_square
from src.engine.piece import BLACK, PAWN, ROOK, WHITE, Piece
from src.protocol.console.loop import ConsoleSession


class _Terminal:
    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.lines: List[str] = list(lines)
        self.out: List[str] = []

    def write(self, text: str) -> None:
        self.out.append(text)

    def read(self) -> Optional[str]:
        return self.lines.pop(0) if self.lines else None

    @property
    def text(self) -> str:
        return "".join(self.out)


def _session(term: _Terminal, game: Optional[Game] = None, **kw) -> ConsoleSession:
    return ConsoleSession(game or Game.new(), write=term.write, read=term.read, **kw)


def test_test_mode_plays_scripted_move_and_one_reply() -> None:
    term = _Terminal()
    session = _session(term, test_mode=True)
    session.run()

    start = Board.startpos().to_diagram()
    assert term.text.startswith(start + "\n\nYour move: a2 a4\n\n")
    assert (
        "best move: {P} d7 d5 0.05;  P  d2 d4 0.73; {P} e7 e6 -0.03; \n\n\n" in term.text
    )
    assert "Check!" not in term.text
    assert "Checkmate!" not in term.text

    squares = session.game.board.squares
    assert squares[str_to_square("a4")] == Piece(PAWN, WHITE)
    assert squares[str_to_square("a2")].is_empty
    assert squares[str_to_square("d5")] == Piece(PAWN, BLACK)
    assert squares[str_to_square("d7")].is_empty
    assert term.text.endswith(session.game.to_diagram() + "\n")


def test_bad_input_is_reported_until_quit() -> None:
    term = _Terminal(["hello", "e4 e5", "quit"])
    session = _session(term)
    session.run()

    assert term.text.count("Your move: ") == 3
    assert USAGE_MESSAGE in term.text
    assert "Not your piece at e4" in term.text
    assert "best move:" not in term.text
    assert session.game.move_history() == []


def test_end_of_input_ends_session() -> None:
    term = _Terminal()
    _session(term).run()
    assert term.text.endswith("\nYour move: ")


def test_check_indicator_before_prompt(check_diagram: str) -> None:
    term = _Terminal(["q"])
    _session(term, Game.from_diagram(check_diagram)).run()
    assert "      Check!\n\nYour move: " in term.text


def test_checkmate_ends_game(mate_diagram: str) -> None:
    term = _Terminal(["c2 c3"])
    session = _session(term, Game.from_diagram(mate_diagram, depth=4))
    session.run()

    assert "best move: {R} a8 a1 809.2;  P  c3 c4 -899; {R} a1 h1 999.56; " in term.text
    assert term.text.endswith(session.game.to_diagram() + "\nCheckmate!\n")
    assert session.game.board.squares[str_to_square("a1")] == Piece(ROOK, BLACK)


def test_load_position_reports_missing_file(tmp_path: Path) -> None:
    term = _Terminal()
    session = _session(term)
    missing = tmp_path / "nope.txt"
    assert not session.load_position(str(missing))
    assert term.text == f"Error loading file {missing}\n"
    assert session.game.to_diagram() == Board.startpos().to_diagram()


def test_load_position_reports_bad_diagram(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("9: {R}{N}{B}{Q}{K}{B}{N}{R}\n", encoding="utf-8")
    term = _Terminal()
    session = _session(term)
    assert not session.load_position(str(path))
    assert term.text == f"Error loading file {path}: row 9 out of range\n"


def test_load_position_replaces_board(tmp_path: Path, mate_diagram: str) -> None:
    path = tmp_path / "mate.txt"
    path.write_text(mate_diagram, encoding="utf-8")
    term = _Terminal()
    session = _session(term)
    assert session.load_position(str(path))
    assert term.text == ""
    assert session.game.to_diagram() == Board.from_diagram(mate_diagram).to_diagram()
