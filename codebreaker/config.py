"""
Single place to:
- Load a local .env (dev convenience; in prod the platform injects env vars)
- Read game defaults and the randomness source from env
- Fail loudly on values that make no sense

Why: routes and tests read one Settings object instead of poking at os.environ.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, get_args

from dotenv import load_dotenv

from .types import Pool, RandomSourceName

# 1) Load env vars from .env if present
load_dotenv()

DEFAULT_POOL = "ROYGBIV"
DEFAULT_LENGTH = 4


@dataclass(frozen=True)
class Settings:
    app_env: str = "local"
    pool: Pool = DEFAULT_POOL
    length: int = DEFAULT_LENGTH
    random_source: RandomSourceName = "system"
    seed: Optional[int] = None
    random_org_timeout: float = 3.0
    random_org_batch: int = 16
    random_org_cooldown: float = 60.0
    log_level: str = "INFO"


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}.") from None


def get_settings() -> Settings:
    # 2) Pull each value, falling back to the defaults above
    pool = os.getenv("CODEBREAKER_POOL", DEFAULT_POOL)
    length = _int_env("CODEBREAKER_LENGTH", DEFAULT_LENGTH)
    source = os.getenv("CODEBREAKER_RANDOM_SOURCE", "system").strip().lower()
    batch = _int_env("RANDOM_ORG_BATCH", 16)
    cooldown = _float_env("RANDOM_ORG_COOLDOWN", 60.0)
    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

    # 3) Sanity checks
    if not pool:
        raise RuntimeError("CODEBREAKER_POOL must not be empty.")
    if length < 1:
        raise RuntimeError("CODEBREAKER_LENGTH must be at least 1.")
    if source not in get_args(RandomSourceName):
        raise RuntimeError(
            f"CODEBREAKER_RANDOM_SOURCE must be one of {', '.join(get_args(RandomSourceName))}; got {source!r}."
        )
    if batch < 1:
        raise RuntimeError("RANDOM_ORG_BATCH must be at least 1.")
    if cooldown < 0:
        raise RuntimeError("RANDOM_ORG_COOLDOWN must not be negative.")
    # getLevelName maps known names to their number and anything else to a string
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {log_level!r}.")

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        pool=pool,
        length=length,
        random_source=source,
        seed=_int_env("CODEBREAKER_SEED", None),
        random_org_timeout=_float_env("RANDOM_ORG_TIMEOUT", 3.0),
        random_org_batch=batch,
        random_org_cooldown=cooldown,
        log_level=log_level,
    )
