"""Match with a telemetry span covering its whole lifetime."""

from __future__ import annotations

import time

from opentelemetry import trace

from seabattle.engine.board import AttackResult
from seabattle.engine.cell import CellState
from seabattle.engine.errors import SeabattleError
from seabattle.engine.identifiers import ShipId
from seabattle.engine.match import Match, MatchState
from seabattle.engine.ship import Orientation, ShipKind
from seabattle.engine.side import BoardSide
from seabattle.telemetry import get_logger, get_tracer, record_match_metric


class InstrumentedMatch(Match):
    """Wraps Match with per-command spans, counters and a match-long span.

    The match span is never made current: command spans are parented to it
    explicitly, so matches that overlap in one process do not disturb each
    other's context or the caller's.
    """

    def __init__(self, *args, **kwargs) -> None:
        self._logger = get_logger("seabattle.engine")
        self._tracer = get_tracer("seabattle.engine")
        self._match_span = None
        self._match_context = None
        self._started_at: float | None = None
        self._attack_count = 0
        super().__init__(*args, **kwargs)
        self._open_match_span()

    def place_ship(
        self,
        side: BoardSide | str,
        kind: ShipKind | str,
        orientation: Orientation | str,
        bow_code: str,
    ) -> ShipId:
        with self._command_span("seabattle.engine.place_ship") as span:
            span.set_attribute("match.id", str(self.id))
            try:
                ship_id = super().place_ship(side, kind, orientation, bow_code)
            except SeabattleError as exc:
                self._record_rejection(span, "place_ship", side, exc)
                raise
            side_label = BoardSide.parse(side).value
            record_match_metric("seabattle_ships_placed_total", 1, {"side": side_label})
            if self.state is MatchState.BOARDS_READY:
                span.set_attribute("boards_ready", True)
            return ship_id

    def start_gameplay(self) -> None:
        with self._command_span("seabattle.engine.start_gameplay"):
            super().start_gameplay()
            record_match_metric("seabattle_match_started_total", 1)
            self._logger.info("Match %s gameplay started", self.id)

    def attack(self, side: BoardSide | str, cell_code: str) -> AttackResult:
        with self._command_span("seabattle.engine.attack") as span:
            span.set_attribute("match.id", str(self.id))
            span.set_attribute("cell", str(cell_code))
            try:
                result = super().attack(side, cell_code)
            except SeabattleError as exc:
                self._record_rejection(span, "attack", side, exc)
                raise
            side_label = BoardSide.parse(side).value

            self._attack_count += 1
            hit = result.cell_state is CellState.HIT
            span.set_attribute("hit", hit)
            span.set_attribute("sunk", result.sunk)

            record_match_metric("seabattle_attacks_total", 1, {"side": side_label})
            record_match_metric(
                "seabattle_attacks_by_result_total",
                1,
                {"side": side_label, "result": result.cell_state.value},
            )
            if result.sunk:
                record_match_metric("seabattle_ships_sunk_total", 1, {"side": side_label})

            self._logger.info(
                "attack side=%s cell=%s outcome=%s sunk=%s",
                side_label,
                cell_code,
                result.cell_state.value,
                result.sunk,
            )

            if self.state is MatchState.GAME_OVER:
                self._finish_match()
            return result

    def _record_rejection(self, span, command: str, side, exc: SeabattleError) -> None:
        record_match_metric(
            "seabattle_rejected_commands_total",
            1,
            {"command": command, "error": type(exc).__name__},
        )
        span.record_exception(exc)
        span.set_attribute("error", True)
        self._logger.debug("Rejected %s on %s: %s", command, side, exc)

    def _command_span(self, name: str):
        return self._tracer.start_as_current_span(name, context=self._match_context)

    def _open_match_span(self) -> None:
        self._started_at = time.perf_counter()
        self._match_span = self._tracer.start_span("seabattle.engine.match")
        self._match_span.set_attribute("match.id", str(self.id))
        self._match_span.set_attribute("board_size", self.board_size)
        self._match_context = trace.set_span_in_context(self._match_span)

    def _finish_match(self) -> None:
        duration = (time.perf_counter() - self._started_at) if self._started_at else 0.0
        winner = self.winner.value if self.winner else "unknown"

        record_match_metric("seabattle_match_completed_total", 1, {"winner": winner})
        record_match_metric("seabattle_match_duration_seconds", duration, {"winner": winner})

        with self._command_span("seabattle.engine.match_complete") as span:
            span.set_attribute("match.id", str(self.id))
            span.set_attribute("winner", winner)
            span.set_attribute("attacks", self._attack_count)
            span.set_attribute("duration_ms", duration * 1000)

        if self._match_span is not None:
            self._match_span.set_attribute("winner", winner)
            self._match_span.set_attribute("attacks", self._attack_count)

        self._logger.info(
            "Match %s finished. Winner=%s attacks=%d duration_s=%.3f",
            self.id,
            winner,
            self._attack_count,
            duration,
        )
        self._close_match_span()

    def _close_match_span(self) -> None:
        if self._match_span is not None:
            self._match_span.end()
            self._match_span = None
            self._match_context = None
