"""
In-memory store
Holds live game sessions in memory, keyed by game id.
Nothing survives a process restart.

Every call takes the same lock, so two requests racing on one game are
handled one after the other. Callers get back snapshots copied while the
lock is held, never a live view they would have to read unguarded.
"""

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Dict, Optional, Tuple
from uuid import uuid4

from .engine import ScoredGuess
from .session import GameSession
from .types import GuessText, Pool, RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    game_id: str
    pool: Pool
    length: int
    history: Tuple[ScoredGuess, ...]
    secret: str

    @property
    def guess_count(self) -> int:
        return len(self.history)

    @property
    def solved(self) -> bool:
        # Winning is decided here, not by the session
        for scored in self.history:
            if scored.correct_count == self.length:
                return True
        return False


@dataclass(frozen=True)
class GuessResult:
    scored: ScoredGuess
    game: GameSnapshot       # state right after this guess
    already_solved: bool     # was the code cracked before this guess?


def _snapshot(game_id: str, session: GameSession) -> GameSnapshot:
    return GameSnapshot(
        game_id=game_id,
        pool=session.pool,
        length=session.length,
        history=session.history,
        secret=str(session.code),
    )


class SessionStore:
    def __init__(self) -> None:
        self._sessions: Dict[str, GameSession] = {}
        self._lock = RLock()

    def create(self, pool: Pool, length: int, rng: RandomSource) -> GameSnapshot:
        # Drawing the secret may mean a network round trip, so keep it out of the lock
        session = GameSession(pool, length, rng)
        new_id = str(uuid4())
        with self._lock:
            self._sessions[new_id] = session
            snapshot = _snapshot(new_id, session)
        logger.info("Created game %s (pool=%s, length=%d)", new_id, session.pool, length)
        return snapshot

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.get(game_id)

    def snapshot(self, game_id: str) -> Optional[GameSnapshot]:
        with self._lock:
            session = self._sessions.get(game_id)
            if session is None:
                return None
            return _snapshot(game_id, session)

    def guess(self, game_id: str, text: GuessText) -> Optional[GuessResult]:
        """
        Returns the scored guess plus the game state around it, or None if
        there is no such game.
        Invalid text raises InvalidGuessLength / InvalidGuessCharacter.
        """
        with self._lock:
            session = self._sessions.get(game_id)
            if session is None:
                return None
            already_solved = _snapshot(game_id, session).solved
            scored = session.guess(text)
            return GuessResult(
                scored=scored,
                game=_snapshot(game_id, session),
                already_solved=already_solved,
            )

    def restart(self, game_id: str) -> Optional[GameSnapshot]:
        with self._lock:
            session = self._sessions.get(game_id)
            if session is None:
                return None
            session.restart()
            snapshot = _snapshot(game_id, session)
        logger.info("Restarted game %s", game_id)
        return snapshot

    def discard(self, game_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(game_id, None)
        if removed is not None:
            logger.info("Discarded game %s", game_id)
        return removed is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
