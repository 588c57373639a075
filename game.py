from __future__ import annotations

# Facade module that re-exports the dots and boxes core.
# Single-responsibility modules live under boxes_core/*.

from boxes_core.board import Board, Cell, CellKind, Coord, cell_kind
from boxes_core.moves import Command, Move, Orientation, SaveRequest, parse_command
from boxes_core.engine import Game, MoveOutcome, Phase, default_symbols
from boxes_core.savefile import SaveData, format_save, parse_save, read_save, write_save
from boxes_core.config import Config, build_config
from boxes_core.errors import (
    BoardInvariantError,
    BoxesError,
    ConfigurationError,
    DimensionError,
    FatalError,
    IllegalMoveError,
    InputStreamError,
    MoveParseError,
    PlayerCountError,
    SaveExistsError,
    SaveFileError,
    SaveFormatError,
    SaveWriteError,
    SystemCallError,
    UsageError,
)
from boxes_core.cli import main

__all__ = [
    'Board', 'Cell', 'CellKind', 'Coord', 'cell_kind',
    'Command', 'Move', 'Orientation', 'SaveRequest', 'parse_command',
    'Game', 'MoveOutcome', 'Phase', 'default_symbols',
    'SaveData', 'format_save', 'parse_save', 'read_save', 'write_save',
    'Config', 'build_config',
    'BoardInvariantError', 'BoxesError', 'ConfigurationError', 'DimensionError',
    'FatalError', 'IllegalMoveError', 'InputStreamError', 'MoveParseError',
    'PlayerCountError', 'SaveExistsError', 'SaveFileError', 'SaveFormatError',
    'SaveWriteError', 'SystemCallError', 'UsageError',
    'main',
]


if __name__ == '__main__':
    import sys

    sys.exit(main())
