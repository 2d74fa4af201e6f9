"""The two boards of a match."""

from __future__ import annotations

from enum import Enum

from . import errors
from .parsing import parse_member


class BoardSide(Enum):
    """Which board a command targets: the owning player's or the opponent's."""

    MINE = "mine"
    THEIRS = "theirs"

    def opposite(self) -> BoardSide:
        """Return the other board."""
        return BoardSide.THEIRS if self is BoardSide.MINE else BoardSide.MINE

    @classmethod
    def parse(cls, value: BoardSide | str) -> BoardSide:
        return parse_member(cls, value, errors.INVALID_BOARD_SIDE)
