"""Entry model: immutable per-scan records for files and directories.

This package contains non-UI primitives only:
- entry datatypes
- stat-to-entry translation (allocation size, permission strings)
"""

from __future__ import annotations

from .metadata import STAT_BLOCK_BYTES, allocation_size, entry_from_stat, format_permissions
from .types import Entry, EntryKind

__all__ = [
    "Entry",
    "EntryKind",
    "STAT_BLOCK_BYTES",
    "allocation_size",
    "entry_from_stat",
    "format_permissions",
]
