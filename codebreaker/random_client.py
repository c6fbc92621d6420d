"""
Randomness sources for secret codes.

- SystemRandomSource: local secure random (secrets.randbelow)
- SeededRandomSource: repeatable draws for tests and demos
- RandomOrgSource: HTTP call to random.org with a clear fallback. If anything
  goes wrong (no internet, timeout, bad response) we fall back to the local
  secure generator so a game can still start.
"""

import logging
import random
from secrets import randbelow
from time import monotonic
from typing import Dict, List, Optional

import requests

from .config import Settings
from .types import RandomSource

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/integers/"


class SystemRandomSource:
    def randbelow(self, n: int) -> int:
        return randbelow(n)


class SeededRandomSource:
    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._random.randrange(n)


class RandomOrgSource:
    """
    Draws come from random.org in batches, one buffer per bound, so a
    4-character code over a 7-character pool costs one request instead of four.
    After a failed request we stay on local secure random for `cooldown`
    seconds instead of paying the timeout again on every draw.
    """

    def __init__(self, timeout: float = 3.0, batch_size: int = 16, cooldown: float = 60.0) -> None:
        self.timeout = timeout
        self.batch_size = batch_size
        self.cooldown = cooldown
        self._offline_until = 0.0
        self._buffers: Dict[int, List[int]] = {}

    def fetch(self, n: int, count: int) -> List[int]:
        # Parameters to send to random.org
        params = {
            "num": count,      # how many numbers we want
            "min": 0,          # smallest allowed number
            "max": n - 1,      # largest allowed number
            "col": 1,          # one number per line
            "base": 10,        # normal decimal numbers
            "format": "plain", # plain text response
            "rnd": "new",      # always generate new numbers
        }
        response = requests.get(RANDOM_URL, params=params, timeout=self.timeout)

        # If the response was not 200 OK, this will raise an error
        response.raise_for_status()

        # The body looks like:
        #   0\n3\n1\n2\n
        values = [int(line) for line in response.text.splitlines() if line.strip()]

        if len(values) != count:
            raise ValueError(f"random.org returned {len(values)} values, expected {count}.")
        for value in values:
            if value < 0 or value >= n:
                raise ValueError(f"random.org number {value} out of range 0..{n - 1}.")
        return values

    def randbelow(self, n: int) -> int:
        if n < 1:
            raise ValueError("Upper bound must be positive.")
        if n == 1:
            return 0

        buffer = self._buffers.setdefault(n, [])
        if not buffer:
            if monotonic() < self._offline_until:
                return randbelow(n)
            try:
                buffer.extend(self.fetch(n, self.batch_size))
            except (requests.RequestException, ValueError) as exc:
                self._offline_until = monotonic() + self.cooldown
                logger.warning(
                    "random.org unavailable (%s); using local secure random for %.0fs", exc, self.cooldown
                )
                return randbelow(n)
        return buffer.pop()


def make_random_source(settings: Settings) -> RandomSource:
    if settings.random_source == "random_org":
        return RandomOrgSource(
            timeout=settings.random_org_timeout,
            batch_size=settings.random_org_batch,
            cooldown=settings.random_org_cooldown,
        )
    if settings.random_source == "seeded":
        return SeededRandomSource(settings.seed)
    return SystemRandomSource()
