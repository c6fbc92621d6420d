"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .engine import ScoredGuess
from .store import GameSnapshot, GuessResult


def feedback_message(correct: int, close: int) -> str:
    # Never say *which* characters matched
    if correct == 0 and close == 0:
        return "all incorrect"
    return f"{correct} correct, {close} close"


# 1. Represents response when a new game is started
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; secret is never returned")
    pool: str = Field(..., description="Characters allowed in the code and in guesses")
    length: int = Field(..., description="Number of characters in the code")


# 2. Player's guess
class GuessRequest(BaseModel):
    # Passed through untouched: a pool may contain spaces, so whitespace is
    # part of the guess. Length and characters are checked by the session.
    guess: str = Field(..., description="The guess text, ex. 'RGBY'")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"guess": "ROYG"},
                {"guess": "BBIV"},
            ]
        }
    }


# 3. Describes the feedback for a single guess
class GuessEntryOut(BaseModel):
    text: str = Field(..., description="The player's guess")
    correct: int = Field(..., description="Characters in exactly the right position")
    close: int = Field(..., description="Right characters in the wrong position")
    message: str = Field(..., description="Feedback message")

    @classmethod
    def from_scored(cls, scored: ScoredGuess) -> "GuessEntryOut":
        return cls(
            text=scored.text,
            correct=scored.correct_count,
            close=scored.close_count,
            message=feedback_message(scored.correct_count, scored.close_count),
        )


# 4. Represents the overall state of the game
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    pool: str = Field(..., description="Characters allowed in the code and in guesses")
    length: int = Field(..., description="Number of characters in the code")
    guess_count: int = Field(..., description="How many guesses have been made")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")
    solved: bool = Field(..., description="True once some guess matched every position")
    secret: Optional[str] = Field(None, description="The secret code (only revealed once solved)")

    @classmethod
    def from_snapshot(cls, game: GameSnapshot) -> "GameState":
        solved = game.solved
        return cls(
            game_id=game.game_id,
            pool=game.pool,
            length=game.length,
            guess_count=game.guess_count,
            history=[GuessEntryOut.from_scored(g) for g in game.history],
            solved=solved,
            secret=game.secret if solved else None,
        )


# 5. Result of a guess
class GuessResponse(BaseModel):
    feedback: GuessEntryOut = Field(..., description="Feedback from the latest guess")
    guess_count: int = Field(..., description="How many guesses have been made")
    solved: bool = Field(..., description="True once some guess matched every position")
    secret: Optional[str] = Field(None, description="The secret code (only revealed once solved)")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Code already solved.')")

    @classmethod
    def from_result(cls, result: GuessResult) -> "GuessResponse":
        solved = result.game.solved
        return cls(
            feedback=GuessEntryOut.from_scored(result.scored),
            guess_count=result.game.guess_count,
            solved=solved,
            # Only reveal the secret once the code has been cracked
            secret=result.game.secret if solved else None,
            note="Code already solved." if result.already_solved else None,
        )
