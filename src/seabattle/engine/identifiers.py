"""Typed identifiers for the entities of a match."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

NIL_UUID = uuid.UUID(int=0)


@dataclass(frozen=True)
class MatchId:
    value: uuid.UUID

    @classmethod
    def new(cls) -> MatchId:
        return cls(uuid.uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ShipId:
    value: uuid.UUID

    @classmethod
    def new(cls) -> ShipId:
        return cls(uuid.uuid4())

    @property
    def is_nil(self) -> bool:
        return self.value == NIL_UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PlayerId:
    value: uuid.UUID

    @classmethod
    def new(cls) -> PlayerId:
        return cls(uuid.uuid4())

    def __str__(self) -> str:
        return str(self.value)
