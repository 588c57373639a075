from __future__ import annotations


class BoxesError(Exception):
    """Base class for every error raised by the game."""


class FatalError(BoxesError):
    """An error that ends the process with a distinct exit status."""
    exit_code = 1
    message = 'Unhandled error!'

    def __init__(self, detail: str = '') -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class ConfigurationError(FatalError):
    pass


class UsageError(ConfigurationError):
    exit_code = 1
    message = 'Usage: boxes height width playercount [filename]'


class DimensionError(ConfigurationError):
    exit_code = 2
    message = 'Invalid grid dimensions'


class PlayerCountError(ConfigurationError):
    exit_code = 3
    message = 'Invalid player count'


class SaveFileError(FatalError):
    """The save file given at startup could not be opened."""
    exit_code = 4
    message = 'Invalid grid file'


class SaveFormatError(FatalError):
    """The save file contents are malformed or inconsistent."""
    exit_code = 5
    message = 'Error reading grid contents'


class InputStreamError(FatalError):
    exit_code = 6
    message = 'End of user input'


class SaveWriteError(BoxesError):
    pass


class SaveExistsError(SaveWriteError):
    """The save destination already exists or cannot be created. Recoverable."""
    message = 'Error opening file for saving grid'


class SystemCallError(SaveWriteError, FatalError):
    """Writing failed after the destination was created."""
    exit_code = 9
    message = 'System call failure'


class IllegalMoveError(BoxesError):
    """A move that cannot be applied. The player is asked again."""


class MoveParseError(IllegalMoveError):
    """A command line that is not a move or a save request."""


class BoardInvariantError(RuntimeError):
    """Raised when board primitives are used against their preconditions."""
