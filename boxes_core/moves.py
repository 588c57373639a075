from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import MoveParseError


class Orientation(Enum):
    HORIZONTAL = 'h'
    VERTICAL = 'v'


@dataclass(frozen=True)
class Move:
    """An edge claim in logical coordinates (zero-based edge-slot row and column)."""
    row: int
    col: int
    orientation: Orientation


@dataclass(frozen=True)
class SaveRequest:
    path: str


Command = Union[Move, SaveRequest]


def _parse_coordinate(token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise MoveParseError(f'not a coordinate: {token!r}')
    return int(token)


def parse_orientation(token: str) -> Orientation:
    try:
        return Orientation(token)
    except ValueError:
        raise MoveParseError(f'unknown orientation: {token!r}') from None


def parse_command(line: str) -> Command:
    """Parses one line of player input: `<row> <col> <h|v>` or `w <path>`."""
    parts = line.strip().split()
    if len(parts) == 2 and parts[0] == 'w':
        return SaveRequest(parts[1])
    if len(parts) != 3:
        raise MoveParseError(f'expected 3 arguments, got {len(parts)}')
    row = _parse_coordinate(parts[0])
    col = _parse_coordinate(parts[1])
    return Move(row, col, parse_orientation(parts[2]))
