"""Tests for Ship domain logic."""

import pytest

from seabattle.engine.errors import InvalidArgumentError, InvalidFormatError, InvalidStateError
from seabattle.engine.ship import Orientation, Ship, ShipKind


def test_ship_kinds_have_fixed_sizes() -> None:
    assert len(ShipKind) == 5
    assert {kind: kind.size for kind in ShipKind} == {
        ShipKind.DESTROYER: 2,
        ShipKind.CRUISER: 3,
        ShipKind.SUBMARINE: 3,
        ShipKind.BATTLESHIP: 4,
        ShipKind.CARRIER: 5,
    }


def test_ship_position_horizontal_and_vertical() -> None:
    horizontal = Ship(ShipKind.DESTROYER, ["A1", "B1"])
    vertical = Ship(ShipKind.CRUISER, ["C3", "C4", "C5"])
    assert horizontal.position == ("A1", "B1")
    assert vertical.position == ("C3", "C4", "C5")
    assert not horizontal.sunk


def test_ship_rejects_wrong_cell_count() -> None:
    with pytest.raises(InvalidStateError):
        Ship(ShipKind.BATTLESHIP, ["A1", "B1", "C1"])


@pytest.mark.parametrize(
    "position",
    [
        ["B1", "A1"],
        ["A2", "A1"],
        ["A1", "C1"],
        ["A1", "A3"],
        ["A1", "B2"],
        ["A1", "A1"],
    ],
)
def test_ship_rejects_unaligned_or_out_of_order_positions(position: list[str]) -> None:
    with pytest.raises(InvalidStateError):
        Ship(ShipKind.DESTROYER, position)


def test_ship_rejects_malformed_codes() -> None:
    with pytest.raises(InvalidFormatError):
        Ship(ShipKind.DESTROYER, ["A1", "??"])


def test_ship_hit_and_sink() -> None:
    ship = Ship(ShipKind.CRUISER, ["D3", "D4", "D5"])
    for idx, code in enumerate(ship.position, start=1):
        ship.attack(code)
        assert ship.sunk is (idx == ship.kind.size)


def test_ship_attack_rejects_foreign_and_repeated_cells() -> None:
    ship = Ship(ShipKind.DESTROYER, ["A1", "B1"])
    with pytest.raises(InvalidStateError):
        ship.attack("C1")

    ship.attack("A1")
    with pytest.raises(InvalidStateError):
        ship.attack("A1")
    assert ship.hits == {"A1"}


def test_ships_get_distinct_ids() -> None:
    first = Ship(ShipKind.DESTROYER, ["A1", "B1"])
    second = Ship(ShipKind.DESTROYER, ["A1", "B1"])
    assert first.id != second.id


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("carrier", ShipKind.CARRIER),
        ("SUBMARINE", ShipKind.SUBMARINE),
        (" Destroyer ", ShipKind.DESTROYER),
        (ShipKind.CRUISER, ShipKind.CRUISER),
    ],
)
def test_ship_kind_parse(raw, expected: ShipKind) -> None:
    assert ShipKind.parse(raw) is expected


@pytest.mark.parametrize("raw", ["frigate", "", 3, None])
def test_ship_kind_parse_rejects_unknown_values(raw) -> None:
    with pytest.raises(InvalidArgumentError):
        ShipKind.parse(raw)


def test_orientation_parse() -> None:
    assert Orientation.parse("vertical") is Orientation.VERTICAL
    assert Orientation.parse("HORIZONTAL") is Orientation.HORIZONTAL
    with pytest.raises(InvalidArgumentError):
        Orientation.parse("diagonal")
