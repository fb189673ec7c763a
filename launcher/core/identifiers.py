"""Identifier allocation for game entries."""

from __future__ import annotations

from typing import Callable, Collection
from uuid import UUID, uuid4

from loguru import logger

from launcher.errors import AllocationExhaustedError
from launcher.models.game_entry import NIL_ID

DEFAULT_MAX_ATTEMPTS = 64


class IdAllocator:
    """Hands out random 128-bit ids that are unique within a given set."""

    def __init__(
        self,
        factory: Callable[[], UUID] = uuid4,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._factory = factory
        self._max_attempts = max_attempts

    def new_id(self) -> UUID:
        return self._factory()

    def ensure_unique(self, candidate: UUID, existing_ids: Collection[UUID]) -> UUID:
        """Return *candidate*, or a fresh id if it is nil or already taken.

        Raises AllocationExhaustedError when every attempt collides.
        """
        if candidate != NIL_ID and candidate not in existing_ids:
            return candidate
        for _ in range(self._max_attempts):
            new = self._factory()
            if new != NIL_ID and new not in existing_ids:
                return new
            logger.debug(f"Id collision on {new}, regenerating")
        raise AllocationExhaustedError(self._max_attempts)

    def allocate(self, existing_ids: Collection[UUID]) -> UUID:
        """Shorthand for a brand new id unique against *existing_ids*."""
        return self.ensure_unique(NIL_ID, existing_ids)
