"""
One game: a secret code plus the guesses made against it.

The session has no won/lost state. Whether a guess cracked the code
(correct_count == length) is for the caller to decide.
"""

import logging
from typing import List, Optional, Tuple, Union

from .engine import ScoredGuess, SecretCode
from .errors import InvalidGuess, InvalidGuessCharacter, InvalidGuessLength
from .types import GuessText, Pool, RandomSource

logger = logging.getLogger(__name__)

GuessOutcome = Tuple[str, Union[ScoredGuess, InvalidGuess]]


class GameSession:
    def __init__(self, pool: Pool, length: int, rng: RandomSource) -> None:
        if length < 1:
            raise ValueError("Code length must be at least 1.")
        # Drop repeated pool characters (keeping order) so generation stays uniform
        pool = "".join(dict.fromkeys(pool))
        if not pool:
            raise ValueError("Pool must contain at least one character.")

        self._pool = pool
        self._pool_set = frozenset(pool)
        self._length = length
        self._code = SecretCode.generate(pool, length, rng)
        self._history: List[ScoredGuess] = []

    @property
    def pool(self) -> Pool:
        return self._pool

    @property
    def length(self) -> int:
        return self._length

    @property
    def code(self) -> SecretCode:
        """The secret. Only show str(code) to a player once the game is over."""
        return self._code

    @property
    def history(self) -> Tuple[ScoredGuess, ...]:
        return tuple(self._history)

    @property
    def guess_count(self) -> int:
        return len(self._history)

    def _validate(self, text: GuessText) -> Optional[InvalidGuess]:
        if len(text) != self._length:
            return InvalidGuessLength(required=self._length, provided=len(text))
        for ch in text:
            if ch not in self._pool_set:
                return InvalidGuessCharacter(pool=self._pool, text=text)
        return None

    def guess(self, text: GuessText) -> ScoredGuess:
        """
        Validate, score and record one guess.

        Raises InvalidGuessLength or InvalidGuessCharacter without touching
        the history.
        """
        error = self._validate(text)
        if error is not None:
            logger.info("Rejected guess %r: %s", text, error)
            raise error

        scored = self._code.score(text)
        self._history.append(scored)
        logger.debug(
            "Guess #%d scored correct=%d close=%d",
            len(self._history), scored.correct_count, scored.close_count,
        )
        return scored

    def try_guess(self, text: GuessText) -> GuessOutcome:
        """
        Same as guess(), but reports bad input instead of raising.

        Returns ("ok", ScoredGuess)
        Or: ("invalid_length", InvalidGuessLength)
            ("invalid_character", InvalidGuessCharacter)
        """
        try:
            scored = self.guess(text)
        except InvalidGuess as error:
            return (error.kind, error)
        return ("ok", scored)

    def restart(self) -> None:
        """Forget every guess. The secret stays the same."""
        self._history.clear()
        logger.info("Session restarted (secret kept)")
