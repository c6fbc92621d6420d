"""
Pure game logic (no HTTP, no storage).
For each guess we compute two feedback numbers:
- correct: how many positions hold exactly the secret's character
- close: how many of the remaining guess characters appear somewhere else
  in the secret, never using one secret or guess position twice

We allow duplicates in the secret.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from .types import Pool, RandomSource, Score

SCORED_GUESS_FORMAT = '{{text: "{text}", correct: {correct}, close: {close}}}'


def score(secret: str, candidate: str) -> Score:
    """
    Example:
      secret    = "AABB"
      candidate = "ABAB"
      correct = 2  (A at 0, B at 3)
      close   = 2  (the swapped A and B in the middle)
      Returns a tuple: (correct, close)
    """

    # 0. Validate lengths match (callers are supposed to guarantee this)
    n = len(secret)
    if len(candidate) != n:
        raise ValueError("Secret and candidate must be the same length.")

    # 1. Where does each character occur in the candidate?
    positions: Dict[str, Set[int]] = {}
    for index, ch in enumerate(candidate):
        positions.setdefault(ch, set()).add(index)

    # 2. Working copy of the secret; None marks a consumed position
    work: List[Optional[str]] = list(secret)

    # 3. Exact-match pass --> correct
    correct = 0
    for index in range(n):
        remaining = positions.get(work[index])
        if remaining and index in remaining:
            correct += 1
            remaining.discard(index)
            work[index] = None

    # 4. Close-match pass --> close
    # Each hit consumes one candidate position, so neither side is counted twice
    close = 0
    for ch in work:
        if ch is None:
            continue
        remaining = positions.get(ch)
        if remaining:
            close += 1
            remaining.pop()

    return (correct, close)


@dataclass(frozen=True)
class ScoredGuess:
    text: str
    correct_count: int
    close_count: int

    def __str__(self) -> str:
        return SCORED_GUESS_FORMAT.format(
            text=self.text, correct=self.correct_count, close=self.close_count
        )


@dataclass(frozen=True)
class SecretCode:
    """The hidden sequence a player is trying to break."""

    characters: str

    @classmethod
    def generate(cls, pool: Pool, length: int, rng: RandomSource) -> "SecretCode":
        """
        Draw `length` characters from `pool`, each position independently,
        so repeats are expected. A fixed sequence of draws from `rng`
        always gives the same code.
        """
        if not pool:
            raise ValueError("Pool must contain at least one character.")
        if length < 0:
            raise ValueError("Code length must not be negative.")

        drawn = [pool[rng.randbelow(len(pool))] for _ in range(length)]
        return cls("".join(drawn))

    def __len__(self) -> int:
        return len(self.characters)

    def __str__(self) -> str:
        return self.characters

    def score(self, candidate: str) -> ScoredGuess:
        correct, close = score(self.characters, candidate)
        return ScoredGuess(text=candidate, correct_count=correct, close_count=close)
