'''
Codebreaker API (in-memory)

Endpoints:
POST   /games                -> start a game
GET    /games/{id}           -> read state & history
POST   /games/{id}/guess     -> submit a guess
POST   /games/{id}/restart   -> clear history, same secret
DELETE /games/{id}           -> discard a game

Games live in memory only; a new secret means a new game.
'''

import logging
from typing import Optional, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings, Settings
from .errors import InvalidGuess
from .random_client import make_random_source
from .schemas import (
    GameState,
    GuessRequest,
    GuessResponse,
    NewGameResponse,
)
from .store import SessionStore
from .types import RandomSource

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Codebreaker API", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# One store and one randomness source for the whole process
_store = SessionStore()
_rng = make_random_source(settings)
logger.info("Codebreaker API starting (env=%s, random source=%s)", settings.app_env, settings.random_source)


# Small factories so tests can swap these with app.dependency_overrides
def get_store() -> SessionStore:
    return _store


def get_random_source() -> RandomSource:
    return _rng


def get_app_settings() -> Settings:
    return settings


T = TypeVar("T")


def _require(found: Optional[T]) -> T:
    # store methods return None for an unknown game id
    if found is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return found

# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(
    pool: Optional[str] = Query(None, min_length=1, description="Allowed characters; defaults to config"),
    length: Optional[int] = Query(None, ge=1, description="Code length; defaults to config"),
    store: SessionStore = Depends(get_store),
    rng: RandomSource = Depends(get_random_source),
    app_settings: Settings = Depends(get_app_settings),
) -> NewGameResponse:
    pool = pool if pool is not None else app_settings.pool
    length = length if length is not None else app_settings.length

    game = store.create(pool, length, rng)
    return NewGameResponse(game_id=game.game_id, pool=game.pool, length=game.length)

@app.get("/games/{game_id}", response_model=GameState, summary="Get current game state")
def get_game(
    game_id: str,
    store: SessionStore = Depends(get_store),
) -> GameState:
    return GameState.from_snapshot(_require(store.snapshot(game_id)))

@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: SessionStore = Depends(get_store),
) -> GuessResponse:
    # the session performs the length/character checks & appends to history;
    # the result carries a snapshot taken under the store lock
    try:
        result = store.guess(game_id, payload.guess)
    except InvalidGuess as error:
        raise HTTPException(status_code=400, detail=error.to_detail())
    return GuessResponse.from_result(_require(result))

@app.post("/games/{game_id}/restart", response_model=GameState, summary="Clear the guesses, keep the secret")
def restart_game(
    game_id: str,
    store: SessionStore = Depends(get_store),
) -> GameState:
    return GameState.from_snapshot(_require(store.restart(game_id)))

@app.delete("/games/{game_id}", status_code=204, summary="Discard a game")
def discard_game(
    game_id: str,
    store: SessionStore = Depends(get_store),
) -> Response:
    if not store.discard(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return Response(status_code=204)
