from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import SaveExistsError, SaveFileError, SaveFormatError, SystemCallError

logger = logging.getLogger(__name__)

MAX_CELL_VALUE = 100


@dataclass(frozen=True)
class SaveData:
    """Validated contents of a save file, ready to be loaded onto a fresh board."""
    player_turn: int
    edge_rows: Tuple[str, ...]
    cell_rows: Tuple[Tuple[int, ...], ...]


def _parse_int(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise SaveFormatError(f'not a number: {text!r}')
    return int(text)


def _check_edge_rows(rows: Sequence[str], width: int) -> None:
    for i, bits in enumerate(rows):
        # Horizontal rows come first and alternate with vertical rows.
        expected = width - 1 if i % 2 == 0 else width
        if len(bits) != expected:
            raise SaveFormatError(f'edge row {i} has length {len(bits)}, expected {expected}')
        if any(bit not in '01' for bit in bits):
            raise SaveFormatError(f'edge row {i} is not a bit string: {bits!r}')


def _parse_cell_row(line: str, width: int, max_value: int) -> Tuple[int, ...]:
    values = line.split(',')
    if len(values) != width - 1:
        raise SaveFormatError(f'cell row has {len(values)} values, expected {width - 1}')
    ranks = tuple(_parse_int(v) for v in values)
    for rank in ranks:
        if rank > max_value:
            raise SaveFormatError(f'cell value {rank} exceeds {max_value}')
    return ranks


def parse_save(text: str, height: int, width: int, player_count: int) -> SaveData:
    """
    Parses and validates save file text for a board of height x width dots.

    Layout, by line position:
      1. the player whose turn it is (1-indexed)
      2. 2*height-1 edge rows, horizontal (width-1 bits) and vertical (width bits) alternating
      3. height-1 cell rows of width-1 comma separated owner ranks (0 = empty)
    Any violation raises SaveFormatError.
    """
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    lines = [line.rstrip('\r') for line in lines]

    edge_count = 2 * height - 1
    cell_count = height - 1
    if len(lines) != 1 + edge_count + cell_count:
        raise SaveFormatError(f'expected {1 + edge_count + cell_count} lines, got {len(lines)}')

    player_turn = _parse_int(lines[0])
    if not 1 <= player_turn <= player_count:
        raise SaveFormatError(f'player turn {player_turn} out of range 1..{player_count}')

    edge_rows = lines[1:1 + edge_count]
    _check_edge_rows(edge_rows, width)

    max_value = min(player_count, MAX_CELL_VALUE)
    cell_rows = [_parse_cell_row(line, width, max_value) for line in lines[1 + edge_count:]]

    return SaveData(player_turn, tuple(edge_rows), tuple(cell_rows))


def read_save(path: str, height: int, width: int, player_count: int) -> SaveData:
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise SaveFormatError(str(e)) from e
    except OSError as e:
        raise SaveFileError(str(e)) from e
    data = parse_save(text, height, width, player_count)
    logger.debug('read save %s: turn %d, %d edge rows, %d cell rows',
                 path, data.player_turn, len(data.edge_rows), len(data.cell_rows))
    return data


def format_save(player_turn: int, edge_rows: Sequence[str], cell_rows: Sequence[str]) -> str:
    lines: List[str] = [str(player_turn)]
    lines.extend(edge_rows)
    lines.extend(cell_rows)
    return '\n'.join(lines) + '\n'


def write_save(path: str, contents: str) -> None:
    """
    Writes a save to a path that must not exist yet.

    Failing to create the file is recoverable (SaveExistsError); failing to
    write once it exists is not (SystemCallError).
    """
    try:
        f = open(path, 'x', encoding='utf-8', newline='')
    except OSError as e:
        raise SaveExistsError(str(e)) from e
    try:
        with f:
            f.write(contents)
    except OSError as e:
        raise SystemCallError(str(e)) from e
    logger.debug('wrote save %s (%d bytes)', path, len(contents))
