from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import DimensionError, PlayerCountError, UsageError

MIN_DIMENSION = 2
MAX_DIMENSION = 999
MIN_PLAYERS = 2
MAX_PLAYERS = 100


@dataclass(frozen=True)
class Config:
    """Startup options for one game: board size in dots, player count and an optional save to resume."""
    height: int
    width: int
    player_count: int
    save_path: Optional[str] = None
    debug: bool = False


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting the process."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    # argv can never contain NUL, so no token is read as an option and '-3' or '-h'
    # reach the range checks like any other bad number.
    parser = _ArgumentParser(
        prog='boxes',
        description='Dots and boxes for 2 to 100 players',
        prefix_chars='\0',
        add_help=False,
    )
    parser.add_argument('height', help='Number of dot rows (2-999)')
    parser.add_argument('width', help='Number of dot columns (2-999)')
    parser.add_argument('playercount', help='Number of players (2-100)')
    parser.add_argument('filename', nargs='?', default=None, help='Save file to resume from')
    return parser


def _parse_bounded(text: str, low: int, high: int) -> Optional[int]:
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if low <= value <= high else None


def _env_flag(name: str) -> bool:
    return os.getenv(name, '0').lower() in ('1', 'true', 'yes', 'on')


def build_config(argv: Sequence[str]) -> Config:
    """Builds a Config from command line arguments (without the program name)."""
    args = _build_parser().parse_args(list(argv))

    height = _parse_bounded(args.height, MIN_DIMENSION, MAX_DIMENSION)
    width = _parse_bounded(args.width, MIN_DIMENSION, MAX_DIMENSION)
    if height is None or width is None:
        raise DimensionError(f'{args.height}x{args.width}')

    player_count = _parse_bounded(args.playercount, MIN_PLAYERS, MAX_PLAYERS)
    if player_count is None:
        raise PlayerCountError(args.playercount)

    return Config(
        height=height,
        width=width,
        player_count=player_count,
        save_path=args.filename,
        debug=_env_flag('BOXES_DEBUG'),
    )
