"""Exception types raised by the maze core."""

from __future__ import annotations


class ReefMazeError(Exception):
    """Base class for every error raised by ``reef_maze``."""


class ConfigurationError(ReefMazeError, ValueError):
    """Raised for invalid geometry, settings, solver names or move directions."""


class StorageError(ReefMazeError):
    """Raised by blob storage adapters when a read, write or delete fails."""


__all__ = ["ReefMazeError", "ConfigurationError", "StorageError"]
