"""
Dots and boxes core Python package.

This package holds the game logic behind the `boxes` terminal game so the
entry points stay thin and every rule can be tested without a terminal.
Modules:
- board.py: Board, Cell, CellKind, Coord
- moves.py: Move, SaveRequest, parse_command
- engine.py: Game, MoveOutcome
- savefile.py: save file parsing, validation and writing
- config.py: startup configuration
- cli.py: interactive loop and process entry point
"""
