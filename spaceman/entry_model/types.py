"""Domain datatypes for scanned filesystem entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """Kind of a listed node. Symlinks and special files map onto these two."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Entry:
    """One scanned filesystem object with on-disk usage and metadata.

    ``size`` is allocation (blocks * 512) for files and the recursive,
    filter-independent usage sum for directories.
    """

    path: Path
    name: str
    kind: EntryKind
    size: int
    modified: float
    permissions: str

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def extension(self) -> str | None:
        """Return the final-component extension without its dot, if any."""
        suffix = Path(self.name).suffix
        return suffix[1:] if suffix else None


__all__ = [
    "EntryKind",
    "Entry",
]
