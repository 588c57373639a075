from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence, TextIO

from .config import build_config
from .engine import Game
from .errors import FatalError, IllegalMoveError, InputStreamError, SaveExistsError
from .moves import SaveRequest, parse_command

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool, stream: TextIO) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='[%(name)s] %(levelname)s: %(message)s',
        stream=stream,
    )


def read_command_line(stdin: TextIO) -> str:
    try:
        line = stdin.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise InputStreamError(str(e)) from e
    if not line:
        raise InputStreamError('end of input')
    return line


def play(game: Game, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> str:
    """Runs the turn loop until the board is full and returns the winners line."""
    print(game.render(), file=stdout)
    while not game.is_over:
        print(f'{game.current_symbol}> ', end='', file=stdout, flush=True)
        line = read_command_line(stdin)
        try:
            command = parse_command(line)
            game.handle(command)
        except IllegalMoveError as e:
            logger.debug('rejected %r: %s', line.strip(), e)
            continue
        except SaveExistsError as e:
            logger.debug('save failed: %s', e)
            print(SaveExistsError.message, file=stderr)
            continue
        if isinstance(command, SaveRequest):
            print('Save of grid successful', file=stderr)
            continue
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('%d/%d edges claimed', game.board.claimed_edge_count(), game.board.total_edges)
        print(file=stdout)
        print(game.render(), file=stdout)
    logger.debug('final scores: %s', ', '.join(f'{s}={n}' for s, n in game.scores().items()))
    return game.winners_text()


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        config = build_config(sys.argv[1:] if argv is None else argv)
        _configure_logging(config.debug, stderr)
        game = Game.from_config(config)
        winners = play(game, stdin, stdout, stderr)
    except FatalError as e:
        logger.debug('fatal: %s', e)
        print(e.message, file=stderr)
        return e.exit_code
    print(f'Winner(s): {winners}', file=stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
