"""Two-board match aggregate: lifecycle state and domain events."""

from __future__ import annotations

import logging
from enum import Enum

from seabattle.settings import MatchSettings
from seabattle.telemetry import get_meter, get_tracer

from . import errors
from .board import AttackResult, Board
from .constants import DEFAULT_BOARD_SIZE
from .errors import InvalidStateError
from .events import (
    BoardReadyEvent,
    BoardsReadyEvent,
    CellAttackedEvent,
    DomainEvent,
    GameOverEvent,
    GameStartedEvent,
    ShipSunkEvent,
)
from .identifiers import MatchId, PlayerId, ShipId
from .ship import Orientation, ShipKind
from .side import BoardSide

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.match")
meter = get_meter("seabattle.engine.match")

TRANSITION_COUNTER = meter.create_counter(
    "seabattle_engine_match_transitions",
    unit="1",
    description="Lifecycle transitions taken by matches",
)


class MatchState(Enum):
    """Lifecycle of a match. States are only ever entered in declaration order."""

    STARTED = "started"
    BOARDS_READY = "boards_ready"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


_STATE_ORDER: tuple[MatchState, ...] = tuple(MatchState)


class Match:
    """Owns both boards of a match and records what happened to them.

    Commands go through :meth:`place_ship` and :meth:`attack`. Each successful
    command appends domain events to :attr:`domain_events`; the caller drains
    and publishes them. The match is not thread-safe; callers serialise
    commands against the same match.
    """

    def __init__(
        self,
        player_id: PlayerId,
        board_size: int = DEFAULT_BOARD_SIZE,
        match_id: MatchId | None = None,
    ) -> None:
        self.id: MatchId = match_id or MatchId.new()
        self.player_id = player_id
        self.board_size = board_size
        self._boards: dict[BoardSide, Board] = {
            side: Board(size=board_size, owner=side.value) for side in BoardSide
        }
        self.state: MatchState = MatchState.STARTED
        self.winner: BoardSide | None = None
        self._domain_events: list[DomainEvent] = []
        logger.info(
            "match_created",
            extra={"match_id": str(self.id), "player_id": str(player_id), "board_size": board_size},
        )

    @classmethod
    def from_settings(
        cls, player_id: PlayerId, settings: MatchSettings, match_id: MatchId | None = None
    ) -> Match:
        return cls(player_id, board_size=settings.board_size, match_id=match_id)

    @property
    def is_ready(self) -> bool:
        """True when both boards hold their full fleet."""
        return all(board.is_ready for board in self._boards.values())

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._domain_events)

    def drain_domain_events(self) -> list[DomainEvent]:
        """Return pending events in the order they were recorded and forget them."""
        drained, self._domain_events = self._domain_events, []
        return drained

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def place_ship(
        self,
        side: BoardSide | str,
        kind: ShipKind | str,
        orientation: Orientation | str,
        bow_code: str,
    ) -> ShipId:
        """Place a ship on ``side``'s board with its bow at ``bow_code``."""
        with tracer.start_as_current_span("match.place_ship") as span:
            span.set_attribute("match.id", str(self.id))
            side = BoardSide.parse(side)
            board = self._boards[side]
            span.set_attribute("match.side", side.value)
            self._reject_if_over("place_ship", side)

            was_ready = board.is_ready
            ship_id = board.add_ship(kind, orientation, bow_code)

            if board.is_ready and not was_ready:
                self._record(BoardReadyEvent(match_id=self.id, side=side))
            if self.is_ready and self._before(MatchState.BOARDS_READY):
                self._advance(MatchState.BOARDS_READY)
                self._record(BoardsReadyEvent(match_id=self.id))
            span.set_attribute("match.state", self.state.value)
            return ship_id

    def start_gameplay(self) -> None:
        """Move a match whose boards are both ready into play."""
        with tracer.start_as_current_span("match.start_gameplay") as span:
            span.set_attribute("match.id", str(self.id))
            if self.state is not MatchState.BOARDS_READY or not self.is_ready:
                logger.error(
                    "start_rejected_boards_not_ready",
                    extra={"match_id": str(self.id), "state": self.state.value},
                )
                raise InvalidStateError(errors.MATCH_NOT_READY)
            self._advance(MatchState.IN_PROGRESS)
            self._record(GameStartedEvent(match_id=self.id))

    def attack(self, side: BoardSide | str, cell_code: str) -> AttackResult:
        """Attack ``cell_code`` on ``side``'s board."""
        with tracer.start_as_current_span("match.attack") as span:
            span.set_attribute("match.id", str(self.id))
            side = BoardSide.parse(side)
            board = self._boards[side]
            span.set_attribute("match.side", side.value)
            span.set_attribute("attack.cell", str(cell_code))
            self._reject_if_over("attack", side)

            result = board.attack(cell_code)
            self._record(
                CellAttackedEvent(
                    match_id=self.id, side=side, cell_code=cell_code, cell_state=result.cell_state
                )
            )
            if result.sunk:
                ship = board.ship(result.ship_id)
                self._record(
                    ShipSunkEvent(
                        match_id=self.id, ship_id=ship.id, kind=ship.kind, attacked_side=side
                    )
                )
            if board.is_game_over:
                self.winner = side.opposite()
                self._advance(MatchState.GAME_OVER)
                self._record(GameOverEvent(match_id=self.id, winner=self.winner))
                span.set_attribute("match.winner", self.winner.value)
            return result

    def is_board_ready(self, side: BoardSide | str) -> bool:
        return self._board_for(side).is_ready

    def is_game_over(self, side: BoardSide | str) -> bool:
        """True if every ship on ``side``'s board is sunk, i.e. that side lost."""
        return self._board_for(side).is_game_over

    def ships(self, side: BoardSide | str) -> list[ShipId]:
        return [ship.id for ship in self._board_for(side).ships]

    def ship_position(self, side: BoardSide | str, ship_id: ShipId) -> tuple[str, ...]:
        return tuple(self._board_for(side).ship(ship_id).position)

    def available_cell_codes(self, side: BoardSide | str) -> list[str]:
        return self._board_for(side).available_cell_codes()

    def board(self, side: BoardSide | str) -> Board:
        return self._board_for(side)

    def _board_for(self, side: BoardSide | str) -> Board:
        return self._boards[BoardSide.parse(side)]

    def _reject_if_over(self, command: str, side: BoardSide) -> None:
        if self.state is MatchState.GAME_OVER:
            logger.error(
                "command_rejected_match_over",
                extra={"match_id": str(self.id), "command": command, "side": side.value},
            )
            raise InvalidStateError(errors.MATCH_IS_OVER)

    def _before(self, state: MatchState) -> bool:
        return _STATE_ORDER.index(self.state) < _STATE_ORDER.index(state)

    def _advance(self, state: MatchState) -> None:
        if not self._before(state):
            return
        previous, self.state = self.state, state
        TRANSITION_COUNTER.add(1, attributes={"from": previous.value, "to": state.value})
        logger.info(
            "match_state_changed",
            extra={"match_id": str(self.id), "from_state": previous.value, "to_state": state.value},
        )

    def _record(self, event: DomainEvent) -> None:
        self._domain_events.append(event)
        logger.debug(
            "domain_event_recorded",
            extra={"match_id": str(self.id), "event_type": event.event_type},
        )
