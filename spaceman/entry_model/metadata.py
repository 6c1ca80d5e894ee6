"""Translate ``os.stat_result`` metadata into ``Entry`` records."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .types import Entry, EntryKind

# ``st_blocks`` is always counted in 512-byte units, whatever the fs block size.
STAT_BLOCK_BYTES = 512

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def allocation_size(stat_result: os.stat_result) -> int:
    """Return bytes allocated on disk, not the logical file length."""
    blocks = getattr(stat_result, "st_blocks", None)
    if blocks is None:
        # Platforms without st_blocks only expose the logical length.
        return max(0, int(stat_result.st_size))
    return max(0, int(blocks)) * STAT_BLOCK_BYTES


def format_permissions(mode: int, is_dir: bool) -> str:
    """Render mode bits as ``drwxr-xr-x`` style text (always 10 chars)."""
    chars = ["d" if is_dir else "-"]
    for bit, flag in _PERMISSION_BITS:
        chars.append(flag if mode & bit else "-")
    return "".join(chars)


def entry_from_stat(path: Path, stat_result: os.stat_result, size: int | None = None) -> Entry:
    """Build an ``Entry`` for ``path``.

    Directories must be given their aggregated ``size``; when omitted the
    allocation of the node itself is used.
    """
    is_dir = stat.S_ISDIR(stat_result.st_mode)
    if size is None:
        size = allocation_size(stat_result)
    return Entry(
        path=path,
        name=path.name,
        kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
        size=max(0, int(size)),
        modified=float(stat_result.st_mtime),
        permissions=format_permissions(stat_result.st_mode, is_dir),
    )


__all__ = [
    "STAT_BLOCK_BYTES",
    "allocation_size",
    "format_permissions",
    "entry_from_stat",
]
