"""
Labels for clarity.
"""

from typing import Literal, Protocol, Tuple

Pool = str         # ordered string of legal characters, ex. "ROYGBIV"
GuessText = str    # raw guess, ex. "RRGB"
Score = Tuple[int, int]  # (correct, close)
RandomSourceName = Literal["system", "random_org", "seeded"]


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [0, n)."""

    def randbelow(self, n: int) -> int: ...
