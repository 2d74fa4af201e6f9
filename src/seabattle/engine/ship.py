"""Ship domain model for the match engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from . import errors
from .cell import Cell
from .constants import COLUMN_HEADERS
from .errors import InvalidStateError
from .identifiers import ShipId
from .parsing import parse_member


class Orientation(Enum):
    """Direction a ship extends from its bow."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value: Orientation | str) -> Orientation:
        """Accept a member, its name or its value (case-insensitive)."""
        return parse_member(cls, value, errors.INVALID_ORIENTATION)


class ShipKind(Enum):
    """All supported ship classes."""

    DESTROYER = "destroyer"
    CRUISER = "cruiser"
    SUBMARINE = "submarine"
    BATTLESHIP = "battleship"
    CARRIER = "carrier"

    @property
    def size(self) -> int:
        """Return the number of contiguous cells the ship occupies."""
        return SHIP_SIZES[self]

    @classmethod
    def parse(cls, value: ShipKind | str) -> ShipKind:
        """Accept a member, its name or its value (case-insensitive)."""
        return parse_member(cls, value, errors.INVALID_SHIP_KIND)


SHIP_SIZES: dict[ShipKind, int] = {
    ShipKind.DESTROYER: 2,
    ShipKind.CRUISER: 3,
    ShipKind.SUBMARINE: 3,
    ShipKind.BATTLESHIP: 4,
    ShipKind.CARRIER: 5,
}


@dataclass(eq=False)
class Ship:
    """A placed ship: its cell codes from bow to stern and the hits it has taken.

    The position must have exactly ``kind.size`` codes running along one row
    (increasing column) or one column (increasing row) in the order given.
    """

    kind: ShipKind
    position: Sequence[str]
    id: ShipId = field(default_factory=ShipId.new)
    hits: set[str] = field(default_factory=set, init=False)

    def __post_init__(self) -> None:
        self.kind = ShipKind.parse(self.kind)
        self.position = tuple(self.position)
        _validate_position(self.kind, self.position)

    @property
    def sunk(self) -> bool:
        return len(self.hits) == len(self.position)

    def attack(self, code: str) -> None:
        """Record a hit on one of the ship's cells."""
        if code not in self.position:
            raise InvalidStateError(errors.SHIP_NOT_AT_CELL)
        if code in self.hits:
            raise InvalidStateError(errors.CELL_ALREADY_ATTACKED)
        self.hits.add(code)


def _validate_position(kind: ShipKind, position: tuple[str, ...]) -> None:
    if len(position) != kind.size:
        raise InvalidStateError(errors.SHIP_POSITION_COUNT)

    cells = [Cell.from_code(code) for code in position]
    first_letter, first_digit = cells[0]
    first_column = COLUMN_HEADERS.index(first_letter)

    if all(letter == first_letter for letter, _ in cells):
        expected = [(first_letter, first_digit + offset) for offset in range(len(cells))]
    elif all(digit == first_digit for _, digit in cells):
        expected = [
            (COLUMN_HEADERS[first_column + offset], first_digit)
            if first_column + offset < len(COLUMN_HEADERS)
            else None
            for offset in range(len(cells))
        ]
    else:
        raise InvalidStateError(errors.SHIP_POSITION_ALIGNMENT)

    if cells != expected:
        raise InvalidStateError(errors.SHIP_POSITION_ALIGNMENT)
