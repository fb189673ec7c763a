"""Game entry model — one registered launchable game."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from uuid import UUID

# Legacy entries saved before identifiers existed carry this value.
NIL_ID = UUID(int=0)


@dataclass(frozen=True)
class GameEntry:
    """Game record — stored in games.json.

    ``id`` is the durable identity. Path and name change through edits and
    may be shared between entries (same executable, different configuration).
    """

    display_name: str = ""
    executable_path: str = ""
    start_directory: str = ""
    custom_icon_path: str = ""
    id: UUID = field(default=NIL_ID)

    @classmethod
    def from_executable(cls, path: str | Path) -> GameEntry:
        """Default entry for a freshly picked or dropped file."""
        p = Path(path)
        return cls(
            display_name=p.stem,
            executable_path=str(p),
            start_directory=str(p.parent),
        )

    @property
    def is_identified(self) -> bool:
        return self.id != NIL_ID

    @property
    def icon_key(self) -> str:
        return str(self.id)

    def icon_fields(self) -> tuple[str, str]:
        """Fields whose change invalidates the cached icon."""
        return (self.custom_icon_path, self.executable_path)

    def with_id(self, entry_id: UUID) -> GameEntry:
        return replace(self, id=entry_id)

    def with_values(self, values: GameEntry) -> GameEntry:
        """Copy of *values* carrying this entry's identity."""
        return replace(values, id=self.id)
