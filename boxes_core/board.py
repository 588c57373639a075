from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import BoardInvariantError, IllegalMoveError
from .moves import Move, Orientation

Coord = Tuple[int, int]  # raw grid (row, col), dots and boxes included


class CellKind(Enum):
    DOT = 'dot'
    H_EDGE = 'h_edge'
    V_EDGE = 'v_edge'
    BOX = 'box'


def cell_kind(r: int, c: int) -> CellKind:
    """Derives the kind of a grid cell from the parity of its coordinates."""
    if r % 2 == 0:
        return CellKind.DOT if c % 2 == 0 else CellKind.H_EDGE
    return CellKind.V_EDGE if c % 2 == 0 else CellKind.BOX


_FIRST_CELL = {
    CellKind.DOT: (0, 0),
    CellKind.H_EDGE: (0, 1),
    CellKind.V_EDGE: (1, 0),
    CellKind.BOX: (1, 1),
}


@dataclass
class Cell:
    # A 999x999 board holds about four million cells.
    __slots__ = ('kind', 'claimed', 'owner')

    kind: CellKind
    claimed: bool  # edges only
    owner: Optional[str]  # boxes only

    def glyph(self) -> str:
        if self.kind is CellKind.DOT:
            return '+'
        if self.kind is CellKind.H_EDGE:
            return '-' if self.claimed else ' '
        if self.kind is CellKind.V_EDGE:
            return '|' if self.claimed else ' '
        return self.owner or ' '


@dataclass
class Board:
    """
    The whole board as one grid of (2*height-1) x (2*width-1) cells.

    height and width count dots, so the board holds (height-1) x (width-1)
    boxes. Edges are addressed by logical (row, col, orientation) from the
    outside and by raw grid coordinates internally.
    """
    height: int
    width: int
    symbols: Tuple[str, ...]
    grid: List[Cell] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.height < 2 or self.width < 2:
            raise ValueError('board needs at least 2x2 dots')
        self.symbols = tuple(self.symbols)
        self.grid = [Cell(cell_kind(r, c), False, None) for r in range(self.rows) for c in range(self.cols)]

    @classmethod
    def new(cls, height: int, width: int, symbols: Sequence[str]) -> 'Board':
        return cls(height=height, width=width, symbols=tuple(symbols))

    @property
    def rows(self) -> int:
        return 2 * self.height - 1

    @property
    def cols(self) -> int:
        return 2 * self.width - 1

    @property
    def total_boxes(self) -> int:
        return (self.height - 1) * (self.width - 1)

    @property
    def total_edges(self) -> int:
        return self.height * (self.width - 1) + (self.height - 1) * self.width

    def index(self, r: int, c: int) -> int:
        return r * self.cols + c

    def in_grid(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell(self, r: int, c: int) -> Cell:
        return self.grid[self.index(r, c)]

    def coords(self, kind: CellKind) -> Iterable[Coord]:
        """Iterates row-major over the grid coordinates of one cell kind."""
        r0, c0 = _FIRST_CELL[kind]
        for r in range(r0, self.rows, 2):
            for c in range(c0, self.cols, 2):
                yield (r, c)

    # -------- edges --------

    def edge_coord(self, row: int, col: int, orientation: Orientation) -> Coord:
        """Translates a logical edge position to its grid coordinate."""
        if orientation is Orientation.HORIZONTAL:
            if not (0 <= row < self.height and 0 <= col < self.width - 1):
                raise IllegalMoveError(f'horizontal edge ({row}, {col}) is off the board')
            return (2 * row, 2 * col + 1)
        if not (0 <= row < self.height - 1 and 0 <= col < self.width):
            raise IllegalMoveError(f'vertical edge ({row}, {col}) is off the board')
        return (2 * row + 1, 2 * col)

    def claim_edge(self, row: int, col: int, orientation: Orientation) -> Coord:
        """Claims an empty edge slot and returns its grid coordinate."""
        coord = self.edge_coord(row, col, orientation)
        cell = self.cell(*coord)
        if cell.claimed:
            raise IllegalMoveError(f'edge ({row}, {col}, {orientation.value}) is already claimed')
        cell.claimed = True
        return coord

    def claimed_edge_count(self) -> int:
        return sum(1 for cell in self.grid if cell.claimed)

    def open_moves(self) -> List[Move]:
        """Every unclaimed edge as a logical move, horizontal edges first."""
        moves = [
            Move(r, c, Orientation.HORIZONTAL)
            for r in range(self.height) for c in range(self.width - 1)
            if not self.cell(2 * r, 2 * c + 1).claimed
        ]
        moves.extend(
            Move(r, c, Orientation.VERTICAL)
            for r in range(self.height - 1) for c in range(self.width)
            if not self.cell(2 * r + 1, 2 * c).claimed
        )
        return moves

    # -------- boxes --------

    def box_edges(self, box: Coord) -> Tuple[Coord, Coord, Coord, Coord]:
        r, c = box
        return ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1))

    def is_bounded(self, box: Coord) -> bool:
        return all(self.cell(*edge).claimed for edge in self.box_edges(box))

    def adjacent_boxes(self, edge: Coord) -> List[Coord]:
        """The boxes on either side of an edge: above/below or left/right."""
        r, c = edge
        if cell_kind(r, c) is CellKind.H_EDGE:
            candidates = [(r - 1, c), (r + 1, c)]
        elif cell_kind(r, c) is CellKind.V_EDGE:
            candidates = [(r, c - 1), (r, c + 1)]
        else:
            raise BoardInvariantError(f'{edge} is not an edge')
        return [b for b in candidates if self.in_grid(*b)]

    def boxes_closed_by(self, edge: Coord) -> List[Coord]:
        """Boxes next to `edge` that are now fully bounded but not yet filled."""
        return [
            box for box in self.adjacent_boxes(edge)
            if self.cell(*box).owner is None and self.is_bounded(box)
        ]

    def fill_box(self, box: Coord, symbol: str) -> None:
        if not self.in_grid(*box) or cell_kind(*box) is not CellKind.BOX:
            raise BoardInvariantError(f'{box} is not a box')
        if symbol not in self.symbols:
            raise BoardInvariantError(f'unknown player symbol {symbol!r}')
        cell = self.cell(*box)
        if cell.owner is not None:
            raise BoardInvariantError(f'box {box} is already filled')
        if not self.is_bounded(box):
            raise BoardInvariantError(f'box {box} is not fully bounded')
        cell.owner = symbol

    def is_complete(self) -> bool:
        return all(self.cell(*box).owner is not None for box in self.coords(CellKind.BOX))

    def is_consistent(self) -> bool:
        """Every filled box is bounded and every bounded box is filled."""
        return all(
            (self.cell(*box).owner is not None) == self.is_bounded(box)
            for box in self.coords(CellKind.BOX)
        )

    def tally_scores(self) -> Dict[str, int]:
        """Box counts per symbol, keyed in order of first appearance on the board."""
        scores: Dict[str, int] = {}
        for box in self.coords(CellKind.BOX):
            owner = self.cell(*box).owner
            if owner is not None:
                scores[owner] = scores.get(owner, 0) + 1
        return scores

    # -------- save encoding --------

    def serialize(self) -> Tuple[List[str], List[str]]:
        """Returns (edge_rows, cell_rows) exactly as they appear in a save file."""
        ranks = {symbol: rank for rank, symbol in enumerate(self.symbols, start=1)}
        edge_rows: List[str] = []
        cell_rows: List[str] = []
        for r in range(self.rows):
            start = 1 if r % 2 == 0 else 0
            edge_rows.append(''.join(
                '1' if self.cell(r, c).claimed else '0' for c in range(start, self.cols, 2)
            ))
            if r % 2 == 1:
                owners = (self.cell(r, c).owner for c in range(1, self.cols, 2))
                cell_rows.append(','.join(str(ranks[o]) if o is not None else '0' for o in owners))
        return edge_rows, cell_rows

    def load_edges(self, rows: Sequence[str]) -> None:
        for r, bits in enumerate(rows):
            start = 1 if r % 2 == 0 else 0
            for i, bit in enumerate(bits):
                self.cell(r, start + 2 * i).claimed = bit == '1'

    def load_cells(self, rows: Sequence[Sequence[int]]) -> None:
        for i, ranks in enumerate(rows):
            for j, rank in enumerate(ranks):
                self.cell(2 * i + 1, 2 * j + 1).owner = self.symbols[rank - 1] if rank else None

    def render(self) -> str:
        lines: List[str] = []
        for r in range(self.rows):
            lines.append(''.join(self.cell(r, c).glyph() for c in range(self.cols)))
        return '\n'.join(lines)
