"""Match defaults loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field

from seabattle.engine.constants import DEFAULT_BOARD_SIZE, MAXIMUM_BOARD_SIZE


class MatchSettings(BaseModel):
    """Parameters used when a collaborator opens a new match."""

    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=DEFAULT_BOARD_SIZE, le=MAXIMUM_BOARD_SIZE)

    @classmethod
    def from_env(cls, **overrides: Any) -> "MatchSettings":
        """Construct settings from `SEABATTLE_*` env vars; overrides win."""
        data: dict[str, Any] = {}
        board_size = os.getenv("SEABATTLE_BOARD_SIZE")
        if board_size is not None and board_size.strip():
            data["board_size"] = board_size.strip()
        data.update(overrides)
        return cls(**data)


@lru_cache(maxsize=1)
def load_match_settings() -> MatchSettings:
    """Load and cache match settings from the environment."""

    return MatchSettings.from_env()
