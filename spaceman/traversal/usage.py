"""Unbounded disk-usage measurement for directories.

Usage is the sum of ``st_blocks * 512`` over every non-directory node below
a directory, at any depth, ignoring visibility filters. Symlinks are counted
as themselves (never followed) and the walk stays on the directory's device.
Unreadable nodes contribute 0.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from ..entry_model import allocation_size

logger = logging.getLogger(__name__)


def _scan_level(directory: str, device: int) -> tuple[int, list[str]]:
    """Return ``(allocation of direct non-dir children, same-device subdirs)``."""
    own_total = 0
    subdirectories: list[str] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    child_stat = child.stat(follow_symlinks=False)
                except OSError:
                    continue
                if stat.S_ISDIR(child_stat.st_mode):
                    if child_stat.st_dev == device:
                        subdirectories.append(child.path)
                    continue
                own_total += allocation_size(child_stat)
    except OSError as exc:
        logger.debug("usage walk skipping %s: %s", directory, exc)
    return own_total, subdirectories


def directory_usage(directory: Path) -> int:
    """Return the on-disk usage of everything below ``directory``."""
    directory_text = os.fspath(directory)
    try:
        device = os.stat(directory_text).st_dev
    except OSError:
        return 0

    total = 0
    pending = [directory_text]
    while pending:
        own_total, subdirectories = _scan_level(pending.pop(), device)
        total += own_total
        pending.extend(subdirectories)
    return total


class UsageIndex:
    """Memoized usage of every directory below one root.

    Built bottom-up in a single walk so each subtree is read exactly once.
    Lookups outside the indexed tree fall back to ``directory_usage``.
    """

    def __init__(self, totals: dict[Path, int]) -> None:
        self._totals = totals

    @classmethod
    def build(cls, root: Path) -> UsageIndex:
        root_text = os.fspath(root)
        try:
            device = os.stat(root_text).st_dev
        except OSError:
            return cls({})

        own_totals: dict[str, int] = {}
        children_of: dict[str, list[str]] = {}
        preorder: list[str] = []
        pending = [root_text]
        while pending:
            current = pending.pop()
            preorder.append(current)
            own_totals[current], children_of[current] = _scan_level(current, device)
            pending.extend(children_of[current])

        totals: dict[str, int] = {}
        # Reversed pre-order visits every child before its parent.
        for directory in reversed(preorder):
            totals[directory] = own_totals[directory] + sum(totals[child] for child in children_of[directory])
        logger.debug("usage index for %s covers %d directories", root, len(totals))
        return cls({Path(directory): total for directory, total in totals.items()})

    def __len__(self) -> int:
        return len(self._totals)

    def usage_of(self, directory: Path) -> int:
        total = self._totals.get(directory)
        if total is None:
            return directory_usage(directory)
        return total


__all__ = [
    "directory_usage",
    "UsageIndex",
]
