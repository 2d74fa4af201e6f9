"""Tests for the Cell state machine."""

import uuid

import pytest

from seabattle.engine.cell import Cell, CellState
from seabattle.engine.errors import InvalidArgumentError, InvalidFormatError, InvalidStateError
from seabattle.engine.identifiers import ShipId


def test_new_cell_is_clear_with_derived_code() -> None:
    cell = Cell("C", 5)
    assert cell.code == "C5"
    assert cell.column == 2
    assert cell.state is CellState.CLEAR
    assert cell.ship_id is None


def test_assign_occupies_cell_once() -> None:
    cell = Cell("A", 1)
    ship_id = ShipId.new()
    cell.assign(ship_id)
    assert cell.state is CellState.OCCUPIED
    assert cell.ship_id == ship_id

    with pytest.raises(InvalidStateError):
        cell.assign(ShipId.new())
    assert cell.ship_id == ship_id


def test_assign_rejects_nil_ship_id() -> None:
    cell = Cell("A", 1)
    with pytest.raises(InvalidArgumentError):
        cell.assign(ShipId(uuid.UUID(int=0)))
    assert cell.state is CellState.CLEAR


def test_attack_occupied_cell_is_hit() -> None:
    cell = Cell("B", 2)
    cell.assign(ShipId.new())
    assert cell.attack() is CellState.HIT
    assert cell.is_attacked


def test_attack_clear_cell_is_missed() -> None:
    cell = Cell("B", 2)
    assert cell.attack() is CellState.MISSED


@pytest.mark.parametrize("occupied", [True, False])
def test_second_attack_is_rejected_and_state_kept(occupied: bool) -> None:
    cell = Cell("D", 4)
    if occupied:
        cell.assign(ShipId.new())
    first = cell.attack()

    with pytest.raises(InvalidStateError):
        cell.attack()
    assert cell.state is first


def test_assign_after_attack_is_rejected() -> None:
    cell = Cell("E", 5)
    cell.attack()
    with pytest.raises(InvalidStateError):
        cell.assign(ShipId.new())


@pytest.mark.parametrize(
    ("code", "expected"),
    [("A1", ("A", 1)), ("J10", ("J", 10)), ("Z26", ("Z", 26)), ("M9", ("M", 9))],
)
def test_from_code_parses_letter_and_digit(code: str, expected: tuple[str, int]) -> None:
    assert Cell.from_code(code) == expected


@pytest.mark.parametrize("code", ["", "A", "a1", "A0", "A01", "A27", "A100", "1A", "AA1", None])
def test_from_code_rejects_malformed_codes(code) -> None:
    with pytest.raises(InvalidFormatError):
        Cell.from_code(code)


@pytest.mark.parametrize(("letter", "digit"), [("!", 1), ("AB", 1), ("A", 0), ("A", 27)])
def test_constructor_rejects_invalid_coordinates(letter: str, digit: int) -> None:
    with pytest.raises(InvalidFormatError):
        Cell(letter, digit)


def test_cells_compare_by_code() -> None:
    first = Cell("A", 1)
    second = Cell("A", 1)
    second.attack()
    assert first == second
    assert len({first, second}) == 1
