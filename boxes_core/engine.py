from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .board import Board, Coord
from .config import Config
from .errors import IllegalMoveError, SaveFormatError
from .moves import Command, Move, SaveRequest
from .savefile import SaveData, format_save, read_save, write_save

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_MOVE = 'awaiting_move'
    TERMINAL = 'terminal'


# Rank r plays as PLAYER_SYMBOLS[r - 1]. None of these collide with the
# dot and edge glyphs or render blank.
PLAYER_SYMBOLS: Tuple[str, ...] = tuple(
    string.ascii_uppercase
    + string.ascii_lowercase
    + string.digits
    + 'ÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏÐÑÒÓÔÕÖØÙÚÛÜÝÞàáâãäåæç'
)


def default_symbols(player_count: int) -> Tuple[str, ...]:
    if not 0 <= player_count <= len(PLAYER_SYMBOLS):
        raise ValueError(f'no default symbols for {player_count} players')
    return PLAYER_SYMBOLS[:player_count]


@dataclass(frozen=True)
class MoveOutcome:
    """What a single accepted move did to the game."""
    player: str
    edge: Coord
    closed: Tuple[Coord, ...]
    game_over: bool

    @property
    def extra_turn(self) -> bool:
        return bool(self.closed) and not self.game_over


class Game:
    """
    Owns one board and the player rotation for a whole game.

    Closing at least one box keeps the turn with the current player; any
    other accepted move passes it to the next player, wrapping after the last.
    Once every box is filled the game is terminal and accepts no more moves.
    """

    def __init__(
        self,
        board: Board,
        player_count: int,
        player_turn: int = 1,
        symbols: Optional[Sequence[str]] = None,
    ) -> None:
        self.symbols = tuple(symbols) if symbols is not None else default_symbols(player_count)
        if len(self.symbols) != player_count or len(set(self.symbols)) != player_count:
            raise ValueError('need one distinct symbol per player')
        if not 1 <= player_turn <= player_count:
            raise ValueError(f'player turn {player_turn} out of range 1..{player_count}')
        if board.symbols != self.symbols:
            raise ValueError('board and game disagree on player symbols')
        self.board = board
        self.player_count = player_count
        self.player_turn = player_turn
        self.phase = Phase.TERMINAL if board.is_complete() else Phase.AWAITING_MOVE

    @classmethod
    def new(cls, height: int, width: int, player_count: int, player_turn: int = 1) -> 'Game':
        board = Board.new(height, width, default_symbols(player_count))
        return cls(board, player_count, player_turn)

    @classmethod
    def from_save(cls, data: SaveData, height: int, width: int, player_count: int) -> 'Game':
        """Restores a game from validated save data; rejects boards no game could reach."""
        board = Board.new(height, width, default_symbols(player_count))
        board.load_edges(data.edge_rows)
        board.load_cells(data.cell_rows)
        if not board.is_consistent():
            raise SaveFormatError('box ownership does not match claimed edges')
        return cls(board, player_count, data.player_turn)

    @classmethod
    def from_config(cls, config: Config) -> 'Game':
        if config.save_path is None:
            return cls.new(config.height, config.width, config.player_count)
        data = read_save(config.save_path, config.height, config.width, config.player_count)
        game = cls.from_save(data, config.height, config.width, config.player_count)
        logger.debug('resumed game from %s at player %d', config.save_path, game.player_turn)
        return game

    @property
    def current_symbol(self) -> str:
        return self.symbols[self.player_turn - 1]

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.TERMINAL

    def _advance_turn(self) -> None:
        self.player_turn = self.player_turn % self.player_count + 1

    def play(self, move: Move) -> MoveOutcome:
        if self.is_over:
            raise IllegalMoveError('the game is over')
        player = self.current_symbol
        edge = self.board.claim_edge(move.row, move.col, move.orientation)
        closed = self.board.boxes_closed_by(edge)
        for box in closed:
            self.board.fill_box(box, player)
        if closed:
            logger.debug('player %s closed %d box(es): %s', player, len(closed), closed)

        if self.board.is_complete():
            self.phase = Phase.TERMINAL
        elif not closed:
            self._advance_turn()
        return MoveOutcome(player=player, edge=edge, closed=tuple(closed), game_over=self.is_over)

    def handle(self, command: Command) -> Optional[MoveOutcome]:
        """Applies a parsed command. Saves leave the turn where it is and return None."""
        if isinstance(command, SaveRequest):
            self.save(command.path)
            return None
        return self.play(command)

    def save_contents(self) -> str:
        edge_rows, cell_rows = self.board.serialize()
        return format_save(self.player_turn, edge_rows, cell_rows)

    def save(self, path: str) -> None:
        write_save(path, self.save_contents())
        logger.debug('saved game at player %d to %s', self.player_turn, path)

    def scores(self) -> Dict[str, int]:
        tally = self.board.tally_scores()
        return {symbol: tally.get(symbol, 0) for symbol in self.symbols}

    def winners(self) -> List[str]:
        """Symbols with the highest box count, in order of first appearance on the board."""
        tally = self.board.tally_scores()
        if not tally:
            return []
        best = max(tally.values())
        return [symbol for symbol, count in tally.items() if count == best]

    def winners_text(self) -> str:
        return ', '.join(self.winners())

    def legal_moves(self) -> List[Move]:
        return [] if self.is_over else self.board.open_moves()

    def render(self) -> str:
        return self.board.render()
