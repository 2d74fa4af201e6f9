"""Exceptions raised by the match engine.

Bad input raises a ``ValueError`` subclass and rule violations against the
current state raise a ``RuntimeError`` subclass, so callers that only care about
the broad category can keep catching the builtins.
"""

from __future__ import annotations


class SeabattleError(Exception):
    """Base class for every error the engine raises."""


class InvalidFormatError(SeabattleError, ValueError):
    """A cell code is malformed."""


class InvalidArgumentError(SeabattleError, ValueError):
    """An argument is well-formed but outside what the board or match accepts."""


class InvalidStateError(SeabattleError, RuntimeError):
    """The command breaks a game rule given the current state."""


INVALID_CELL_CODE = (
    "Invalid cell code. A cell code is a letter (A to Z) followed by a number (1 to 26) "
    "and must fit the board, e.g. J10 is the last cell of a 10x10 board."
)
CELL_ALREADY_ASSIGNED = "Cell is already assigned and cannot be assigned again."
CELL_ALREADY_ATTACKED = "Cell has already been attacked."
NIL_SHIP_ID = "A ship identifier is required to occupy a cell."

INVALID_BOARD_SIZE = "Invalid board size. It must be between 10 and 26."
SHIP_OFF_BOARD = "Invalid ship position on board."
SHIP_KIND_ALREADY_PLACED = "A ship of this kind has already been placed on the board."
SHIP_ALLOWANCE_EXCEEDED = "The board already holds its full allowance of ships."
SHIP_OVERLAP = "Ship overlaps a cell that is already occupied."
CELLS_NOT_ALIGNED = "Cells must share a row or a column."

SHIP_POSITION_COUNT = "Number of cells must match the size of the ship exactly."
SHIP_POSITION_ALIGNMENT = (
    "Invalid alignment. Cells must run bow to stern along one row or one column without gaps."
)
SHIP_NOT_AT_CELL = "Cell does not belong to the ship's position."

INVALID_BOARD_SIDE = "Invalid board side. Allowed values are `mine` or `theirs`."
INVALID_SHIP_KIND = "Invalid ship kind."
INVALID_ORIENTATION = "Invalid ship orientation. Allowed values are `horizontal` or `vertical`."
MATCH_IS_OVER = "The match is over; no further moves are accepted."
MATCH_NOT_READY = "Both boards must be ready before gameplay starts."
