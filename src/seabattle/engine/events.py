"""Domain events recorded by a match for an external dispatcher."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .cell import CellState
from .identifiers import MatchId, ShipId
from .ship import ShipKind
from .side import BoardSide


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Common envelope: a unique id and the time the event was recorded."""

    match_id: MatchId
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_on: datetime = field(default_factory=_utcnow)

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, kw_only=True)
class BoardReadyEvent(DomainEvent):
    """One side has placed its full fleet."""

    side: BoardSide


@dataclass(frozen=True, kw_only=True)
class BoardsReadyEvent(DomainEvent):
    """Both sides have placed their full fleets."""


@dataclass(frozen=True, kw_only=True)
class GameStartedEvent(DomainEvent):
    """Gameplay has begun."""


@dataclass(frozen=True, kw_only=True)
class CellAttackedEvent(DomainEvent):
    side: BoardSide
    cell_code: str
    cell_state: CellState


@dataclass(frozen=True, kw_only=True)
class ShipSunkEvent(DomainEvent):
    ship_id: ShipId
    kind: ShipKind
    attacked_side: BoardSide


@dataclass(frozen=True, kw_only=True)
class GameOverEvent(DomainEvent):
    """Every ship on one side is sunk; ``winner`` is the other side."""

    winner: BoardSide
