"""Single-side board management for the match engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from seabattle.telemetry import get_meter, get_tracer

from . import errors
from .cell import Cell, CellState
from .constants import COLUMN_HEADERS, DEFAULT_BOARD_SIZE, MAXIMUM_BOARD_SIZE, SHIP_ALLOWANCE
from .errors import InvalidArgumentError, InvalidStateError, SeabattleError
from .identifiers import ShipId
from .ship import Orientation, Ship, ShipKind

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.board")
meter = get_meter("seabattle.engine.board")

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

ATTACK_COUNTER = meter.create_counter(
    "seabattle_engine_attacks",
    unit="1",
    description="Attacks received by a board",
)


class AttackResult(NamedTuple):
    """Outcome of a single attack."""

    cell_state: CellState
    ship_id: ShipId | None = None
    sunk: bool = False


@dataclass
class Board:
    """One side's grid of ``size * size`` cells and the fleet placed on it."""

    size: int = DEFAULT_BOARD_SIZE
    owner: str = "unknown"
    _grid: dict[str, Cell] = field(default_factory=dict, init=False, repr=False)
    _ships: list[Ship] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if (
            isinstance(self.size, bool)
            or not isinstance(self.size, int)
            or not DEFAULT_BOARD_SIZE <= self.size <= MAXIMUM_BOARD_SIZE
        ):
            raise InvalidArgumentError(errors.INVALID_BOARD_SIZE)
        for letter in COLUMN_HEADERS[: self.size]:
            for digit in range(1, self.size + 1):
                cell = Cell(letter, digit)
                self._grid[cell.code] = cell

    @property
    def cells(self) -> list[Cell]:
        return list(self._grid.values())

    @property
    def ships(self) -> tuple[Ship, ...]:
        return tuple(self._ships)

    @property
    def is_ready(self) -> bool:
        """True once the full allowance of ships has been placed."""
        return len(self._ships) == SHIP_ALLOWANCE

    @property
    def is_game_over(self) -> bool:
        """True when at least one ship was placed and every ship is sunk."""
        return bool(self._ships) and all(ship.sunk for ship in self._ships)

    def cell(self, code: str) -> Cell:
        """Return the cell for ``code``; off-board codes raise ``InvalidArgumentError``."""
        letter, digit = Cell.from_code(code)
        cell = self._grid.get(f"{letter}{digit}")
        if cell is None:
            raise InvalidArgumentError(errors.INVALID_CELL_CODE)
        return cell

    def ship(self, ship_id: ShipId) -> Ship:
        for ship in self._ships:
            if ship.id == ship_id:
                return ship
        raise InvalidArgumentError(f"No ship {ship_id} on this board.")

    def available_cell_codes(self) -> list[str]:
        """Codes that have not been attacked yet, in grid order."""
        return [code for code, cell in self._grid.items() if not cell.is_attacked]

    def add_ship(
        self, kind: ShipKind | str, orientation: Orientation | str, bow_code: str
    ) -> ShipId:
        """Place a ship extending from ``bow_code`` and return its identifier.

        Every rule is checked before any cell is touched, so a rejected
        placement leaves the board unchanged.
        """
        with tracer.start_as_current_span("board.add_ship") as span:
            span.set_attribute("board.owner", self.owner)
            span.set_attribute("ship.bow", str(bow_code))
            try:
                kind = ShipKind.parse(kind)
                orientation = Orientation.parse(orientation)
                span.set_attribute("ship.kind", kind.name)
                span.set_attribute("ship.orientation", orientation.name)
                cells = self._placement_cells(kind, orientation, bow_code)
                ship = Ship(kind, [cell.code for cell in cells])
            except SeabattleError as exc:
                PLACEMENT_COUNTER.add(1, attributes={"result": "rejected", "owner": self.owner})
                logger.warning(
                    "ship_placement_rejected",
                    extra={
                        "owner": self.owner,
                        "ship_kind": str(kind),
                        "orientation": str(orientation),
                        "bow": bow_code,
                        "reason": str(exc),
                    },
                )
                raise

            for cell in cells:
                cell.assign(ship.id)
            self._ships.append(ship)

            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            span.set_attribute("ship.id", str(ship.id))
            logger.info(
                "ship_placed",
                extra={
                    "owner": self.owner,
                    "ship_kind": kind.name,
                    "orientation": orientation.name,
                    "position": ",".join(ship.position),
                    "ship_count": len(self._ships),
                },
            )
            return ship.id

    def attack(self, code: str) -> AttackResult:
        """Resolve an attack on ``code`` and report the cell state and any sinking."""
        with tracer.start_as_current_span("board.attack") as span:
            span.set_attribute("board.owner", self.owner)
            span.set_attribute("attack.cell", str(code))
            try:
                cell = self.cell(code)
                state = cell.attack()
            except SeabattleError as exc:
                logger.error(
                    "attack_rejected",
                    extra={"owner": self.owner, "cell_code": code, "reason": str(exc)},
                )
                raise

            sunk = False
            if state is CellState.HIT:
                ship = self.ship(cell.ship_id)
                ship.attack(cell.code)
                sunk = ship.sunk

            span.set_attribute("attack.outcome", state.value)
            span.set_attribute("attack.sunk", sunk)
            ATTACK_COUNTER.add(1, attributes={"outcome": state.value, "owner": self.owner})
            logger.info(
                "cell_attacked",
                extra={
                    "owner": self.owner,
                    "cell_code": cell.code,
                    "outcome": state.value,
                    "sunk": sunk,
                },
            )
            return AttackResult(state, cell.ship_id, sunk)

    def cells_between(self, bow_code: str, stern_code: str) -> list[Cell]:
        """Inclusive run of cells between two endpoints sharing a row or column."""
        bow = self.cell(bow_code)
        stern = self.cell(stern_code)
        if bow.code == stern.code:
            return [bow]
        if bow.digit == stern.digit:
            low, high = sorted((bow.column, stern.column))
            return [self._grid[f"{COLUMN_HEADERS[col]}{bow.digit}"] for col in range(low, high + 1)]
        if bow.letter == stern.letter:
            low, high = sorted((bow.digit, stern.digit))
            return [self._grid[f"{bow.letter}{digit}"] for digit in range(low, high + 1)]
        raise InvalidArgumentError(errors.CELLS_NOT_ALIGNED)

    def _placement_cells(
        self, kind: ShipKind, orientation: Orientation, bow_code: str
    ) -> list[Cell]:
        bow = self.cell(bow_code)
        stern = self._stern_for(bow, kind, orientation)

        if any(ship.kind is kind for ship in self._ships):
            raise InvalidStateError(errors.SHIP_KIND_ALREADY_PLACED)
        if len(self._ships) >= SHIP_ALLOWANCE:
            raise InvalidStateError(errors.SHIP_ALLOWANCE_EXCEEDED)

        cells = self.cells_between(bow.code, stern.code)
        if any(cell.state is not CellState.CLEAR for cell in cells):
            raise InvalidStateError(errors.SHIP_OVERLAP)
        return cells

    def _stern_for(self, bow: Cell, kind: ShipKind, orientation: Orientation) -> Cell:
        steps = kind.size - 1
        if orientation is Orientation.VERTICAL:
            column, digit = bow.column, bow.digit + steps
        else:
            column, digit = bow.column + steps, bow.digit
        if column >= self.size or digit > self.size:
            raise InvalidArgumentError(errors.SHIP_OFF_BOARD)
        return self._grid[f"{COLUMN_HEADERS[column]}{digit}"]
