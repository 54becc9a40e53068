from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from ...engine.board import Board, ParseError
from ...engine.game import Game
from ...engine.move import InputFormatError, Move


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]
Reader = Callable[[], Optional[str]]

# Human move fed by the non-interactive test mode
SCRIPTED_MOVE = "a2 a4"


class ConsoleSession:
    """Terminal adapter: prints the board, reads human moves, plays replies.

    Notes:
    - All text goes through ``write`` (raw text, newlines included) and all
      input through ``read`` (one line, ``None`` at end of input), so the
      session can be driven from tests.
    - In test mode the scripted move is played instead of reading input and
      the session ends after one full round.
    """

    def __init__(
        self,
        game: Optional[Game] = None,
        *,
        test_mode: bool = False,
        write: Optional[Writer] = None,
        read: Optional[Reader] = None,
    ) -> None:
        self.game: Game = game if game is not None else Game.new()
        self.test_mode = test_mode
        self._write: Writer = write or _default_writer
        self._read: Reader = read or _default_reader

    def println(self, text: str = "", end: str = "\n") -> None:
        self._write(text + end)

    def load_position(self, filename: str) -> bool:
        """Replace the board with the diagram in ``filename``.

        Failures are reported and leave the current board in place.
        """
        try:
            board = Board.from_file(filename, side_to_move=self.game.board.side_to_move)
        except ParseError as e:
            self.println(f"Error loading file {filename}: {e}")
            return False
        except OSError:
            logger.warning("cannot read %s", filename, exc_info=True)
            self.println(f"Error loading file {filename}")
            return False
        self.game.board = board
        return True

    def prompt_human_move(self) -> Optional[Move]:
        """Ask until a well-formed move of a human piece is given.

        Returns ``None`` when the human quits or input runs out.
        """
        while True:
            if self.game.in_check():
                self.println("      Check!")

            self.println("\nYour move: ", end="")
            if self.test_mode:
                text: Optional[str] = SCRIPTED_MOVE
                self.println(SCRIPTED_MOVE)
            else:
                text = self._read()
                if text is None or text.startswith("q"):
                    return None
            try:
                return self.game.parse_human_move(text)
            except InputFormatError as e:
                self.println(str(e))
                if self.test_mode:
                    # The scripted move will not change; stop instead of looping
                    return None

    def play_engine_turn(self) -> bool:
        """Let the engine answer; returns True when it declares checkmate."""
        res = self.game.engine_move()
        self.println("best move: " + "".join(f"{m}; " for m in res.best_line[1:]))
        self.println("\n")
        if self.game.is_checkmate(res):
            self.println(self.game.to_diagram())
            self.println("Checkmate!")
            return True
        return False

    def run(self) -> None:
        while True:
            self.println(self.game.to_diagram())

            move = self.prompt_human_move()
            if move is None:
                return
            self.game.apply_move(move)
            self.println()
            self.println(self.game.to_diagram())

            if self.play_engine_turn():
                return

            if self.test_mode:
                self.println()
                self.println(self.game.to_diagram())
                return


def _default_writer(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _default_reader() -> Optional[str]:
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\n")
