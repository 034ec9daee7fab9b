"""Custom exceptions for the maze simulation."""


class MazeChaseError(Exception):
    """Base exception for simulation errors."""

    pass


class InvalidLayoutError(MazeChaseError):
    """Raised when a maze layout cannot be parsed into a rectangular grid."""

    pass


class EntityNotFoundError(MazeChaseError):
    """Raised when an entity is not found."""

    pass


class ItemNotFoundError(MazeChaseError):
    """Raised when an item is not found."""

    pass
