from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .error import install_error_handlers
from .logging_middleware import RequestIDLoggingMiddleware
from .session import GameSessions
from ...engine.game import Game
from ...engine.move import Move
from ...search.service import DEFAULT_CONFIG, SearchResult


logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    diagram: Optional[str] = Field(default=None, description="Starting position diagram")
    depth: Optional[int] = Field(default=None, ge=1, le=DEFAULT_CONFIG.max_plies)


class CreateGameResponse(BaseModel):
    game_id: str
    diagram: str


class SetPositionRequest(BaseModel):
    diagram: str = Field(..., description="Board diagram, ranks 8 to 1")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Two squares, e.g. 'e2 e4'")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=1, le=DEFAULT_CONFIG.max_plies)


class MoveView(BaseModel):
    move: Optional[str]
    text: str
    value: float


class SearchResponse(BaseModel):
    best_move: MoveView
    value: float
    best_line: List[MoveView]
    nodes: int
    depth: int
    time_ms: int


class GameState(BaseModel):
    game_id: str
    diagram: str
    human_moves: List[str]
    in_check: bool
    last_move: Optional[str]
    move_history: List[str]


class ReplyResponse(BaseModel):
    best_move: MoveView
    best_line: List[MoveView]
    checkmate: bool
    state: GameState


def create_app() -> FastAPI:
    app = FastAPI(title="Minichess API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    install_error_handlers(app)

    sessions = GameSessions()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        # ParseError propagates to its 400 handler
        depth = req.depth if req else None
        if req and req.diagram:
            game = Game.from_diagram(req.diagram, depth=depth)
        else:
            game = Game.new(depth=depth)
        game_id = sessions.open(game)
        logger.info("created game %s", game_id)
        return CreateGameResponse(game_id=game_id, diagram=game.to_diagram())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(sessions, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        game = _require_game(sessions, game_id)
        replacement = Game.from_diagram(req.diagram, service=game.service, depth=game.depth)
        sessions.replace(game_id, replacement)
        return _state(game_id, replacement)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(sessions, game_id)
        # InputFormatError propagates to its 400 handler
        game.apply_move(game.parse_human_move(req.move))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/search", response_model=SearchResponse)
    async def search(game_id: str, req: SearchRequest) -> SearchResponse:
        game = _require_game(sessions, game_id)
        res = game.search(req.depth)
        return SearchResponse(
            best_move=_move_view(res.best_move),
            value=res.value,
            best_line=_line_view(res),
            nodes=res.nodes,
            depth=res.depth,
            time_ms=res.time_ms,
        )

    @app.post("/api/games/{game_id}/reply", response_model=ReplyResponse)
    async def reply(game_id: str) -> ReplyResponse:
        game = _require_game(sessions, game_id)
        res = game.engine_move()
        return ReplyResponse(
            best_move=_move_view(res.best_move),
            best_line=_line_view(res),
            checkmate=game.is_checkmate(res),
            state=_state(game_id, game),
        )

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(sessions, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not sessions.close(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    return app


def _require_game(sessions: GameSessions, game_id: str) -> Game:
    game = sessions.lookup(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    history = game.move_history()
    return GameState(
        game_id=game_id,
        diagram=game.to_diagram(),
        human_moves=[m.to_algebraic() for m in game.human_moves()],
        in_check=game.in_check(),
        last_move=history[-1] if history else None,
        move_history=history,
    )


def _move_view(move: Move) -> MoveView:
    return MoveView(
        move=None if move.is_null else move.to_algebraic(),
        text=str(move),
        value=move.value,
    )


def _line_view(res: SearchResult) -> List[MoveView]:
    return [_move_view(m) for m in res.best_line]
