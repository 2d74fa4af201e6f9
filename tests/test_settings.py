"""Match settings tests."""

import pytest
from pydantic import ValidationError

from seabattle import settings as settings_module
from seabattle.settings import MatchSettings


def test_defaults_to_classic_board(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SEABATTLE_BOARD_SIZE", raising=False)
    assert MatchSettings.from_env().board_size == 10


def test_board_size_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", " 12 ")
    assert MatchSettings.from_env().board_size == 12
    assert MatchSettings.from_env(board_size=20).board_size == 20


@pytest.mark.parametrize("size", ["9", "27", "ten"])
def test_board_size_out_of_range_is_rejected(monkeypatch: pytest.MonkeyPatch, size: str) -> None:
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", size)
    with pytest.raises(ValidationError):
        MatchSettings.from_env()


def test_load_match_settings_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    settings_module.load_match_settings.cache_clear()
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", "14")
    first = settings_module.load_match_settings()
    monkeypatch.setenv("SEABATTLE_BOARD_SIZE", "16")
    assert settings_module.load_match_settings() is first
    assert first.board_size == 14
    settings_module.load_match_settings.cache_clear()
