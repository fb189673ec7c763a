"""Launcher error types."""

from __future__ import annotations

from uuid import UUID


class LauncherError(Exception):
    """Base class for registry and import errors."""


class NotFoundError(LauncherError):
    """No entry with the given id is registered."""

    def __init__(self, entry_id: UUID) -> None:
        super().__init__(f"No game with id {entry_id}")
        self.entry_id = entry_id


class AllocationExhaustedError(LauncherError):
    """Identifier generation kept colliding with existing ids."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not allocate a unique id after {attempts} attempts")
        self.attempts = attempts


class PersistenceError(LauncherError):
    """The game library could not be read from or written to disk."""
