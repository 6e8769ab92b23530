"""Application configuration from environment variables."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


@dataclass(frozen=True)
class Config:
    log_level: str = "INFO"
    random_seed: Optional[int] = None
    room_id_length: int = 8


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


@lru_cache
def get_config() -> Config:
    return Config(
        log_level=os.environ.get("SKILL_GOMOKU_LOG_LEVEL", "INFO").upper(),
        random_seed=_optional_int(os.environ.get("SKILL_GOMOKU_RANDOM_SEED")),
        room_id_length=int(os.environ.get("SKILL_GOMOKU_ROOM_ID_LENGTH", "8")),
    )
