"""
Error taxonomy for the help article core.

Routers translate these into HTTP responses (see src/main.py); the core
itself never retries.
"""


class HelpRepositoryError(Exception):
    """Base class for errors raised by the core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(HelpRepositoryError):
    """An article, group or user the operation requires does not exist."""


class InvalidOperationError(HelpRepositoryError):
    """The operation is not allowed for the target's current state."""


class StorageError(HelpRepositoryError):
    """Opaque failure from the persistence layer."""
