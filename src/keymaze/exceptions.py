class KeyMazeError(Exception):
    """Base exception for keymaze domain errors."""


class InvalidDimensions(KeyMazeError, ValueError):
    """Raised when a maze is requested with unsupported width/height."""


class OutOfRange(KeyMazeError, IndexError):
    """Raised when a coordinate lies outside the grid.

    Indicates a caller bug; gameplay code checks ``in_bounds`` first.
    """


class GenerationError(KeyMazeError):
    """Raised when no acceptable layout was produced within the attempt cap."""


class SettingsError(KeyMazeError):
    """Raised when a settings file cannot be parsed into Settings."""
