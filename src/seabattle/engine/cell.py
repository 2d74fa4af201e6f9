"""Single grid square of a board."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from . import errors
from .constants import COLUMN_HEADERS, MAXIMUM_BOARD_SIZE
from .errors import InvalidArgumentError, InvalidFormatError, InvalidStateError
from .identifiers import ShipId

CELL_CODE_PATTERN = re.compile(r"^[A-Z][1-9][0-9]?$")


class CellState(Enum):
    """Occupancy and attack state of a cell."""

    CLEAR = "clear"
    OCCUPIED = "occupied"
    HIT = "hit"
    MISSED = "missed"


@dataclass(eq=False)
class Cell:
    """A board square identified by its column letter and row digit.

    A cell is assigned to a ship at most once and attacked at most once. Both
    transitions raise ``InvalidStateError`` when repeated.
    """

    letter: str
    digit: int
    ship_id: ShipId | None = field(default=None, init=False)
    state: CellState = field(default=CellState.CLEAR, init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.letter, str) or len(self.letter) != 1:
            raise InvalidFormatError(errors.INVALID_CELL_CODE)
        if self.letter not in COLUMN_HEADERS:
            raise InvalidFormatError(errors.INVALID_CELL_CODE)
        if not 0 < self.digit <= MAXIMUM_BOARD_SIZE:
            raise InvalidFormatError(errors.INVALID_CELL_CODE)

    @property
    def code(self) -> str:
        return f"{self.letter}{self.digit}"

    @property
    def column(self) -> int:
        """Zero-based column index of the letter."""
        return COLUMN_HEADERS.index(self.letter)

    @property
    def is_attacked(self) -> bool:
        return self.state in (CellState.HIT, CellState.MISSED)

    def assign(self, ship_id: ShipId) -> None:
        """Mark the cell as occupied by ``ship_id``."""
        if self.state is not CellState.CLEAR:
            raise InvalidStateError(errors.CELL_ALREADY_ASSIGNED)
        if ship_id is None or ship_id.is_nil:
            raise InvalidArgumentError(errors.NIL_SHIP_ID)
        self.ship_id = ship_id
        self.state = CellState.OCCUPIED

    def attack(self) -> CellState:
        """Resolve an attack on this cell and return the resulting state."""
        if self.is_attacked:
            raise InvalidStateError(errors.CELL_ALREADY_ATTACKED)
        self.state = CellState.HIT if self.state is CellState.OCCUPIED else CellState.MISSED
        return self.state

    @staticmethod
    def from_code(code: str) -> tuple[str, int]:
        """Split a code such as ``"C5"`` into its letter and digit."""
        if not isinstance(code, str) or not CELL_CODE_PATTERN.fullmatch(code):
            raise InvalidFormatError(errors.INVALID_CELL_CODE)
        digit = int(code[1:])
        if digit > MAXIMUM_BOARD_SIZE:
            raise InvalidFormatError(errors.INVALID_CELL_CODE)
        return code[0], digit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)
