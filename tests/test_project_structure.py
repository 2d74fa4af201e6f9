"""Basic project scaffolding tests."""

import importlib


def test_submodules_importable() -> None:
    modules = [
        "seabattle.engine.cell",
        "seabattle.engine.ship",
        "seabattle.engine.board",
        "seabattle.engine.match",
        "seabattle.engine.events",
        "seabattle.engine.instrumented_match",
        "seabattle.dispatch",
        "seabattle.settings",
        "seabattle.telemetry",
    ]

    for module in modules:
        assert importlib.import_module(module) is not None


def test_error_kinds_keep_builtin_categories() -> None:
    from seabattle.engine.errors import (
        InvalidArgumentError,
        InvalidFormatError,
        InvalidStateError,
        SeabattleError,
    )

    assert issubclass(InvalidFormatError, ValueError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(InvalidStateError, RuntimeError)
    for error in (InvalidFormatError, InvalidArgumentError, InvalidStateError):
        assert issubclass(error, SeabattleError)
