"""Board geometry and fleet limits shared across the engine."""

from __future__ import annotations

COLUMN_HEADERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_BOARD_SIZE = 10
MAXIMUM_BOARD_SIZE = len(COLUMN_HEADERS)

# One ship of each kind per board.
SHIP_ALLOWANCE = 5
