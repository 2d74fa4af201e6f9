"""Lenient parsing of the engine's enum arguments."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from .errors import InvalidArgumentError

E = TypeVar("E", bound=Enum)


def parse_member(enum_cls: type[E], value: E | str, message: str) -> E:
    """Accept a member of ``enum_cls``, its name or its value (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        cleaned = value.strip().lower()
        for member in enum_cls:
            if cleaned in (member.value, member.name.lower()):
                return member
    raise InvalidArgumentError(f"{message} Got {value!r}.")
