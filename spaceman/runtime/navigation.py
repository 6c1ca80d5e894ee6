"""Navigation controller: current location, back history, and latest scan.

This module intentionally has no UI concerns.

Back navigation follows a fixed transition table, checked top to bottom:

====================================================  ===============  ==========================
Condition                                             Step             History effect
====================================================  ===============  ==========================
resolved parent of current differs from current       ``ASCEND``       push current
otherwise, history is non-empty                       ``POP_HISTORY``  pop target (even if gone)
otherwise                                             ``STAY``         none
====================================================  ===============  ==========================

So history is only replayed once the current location is the filesystem
top (its parent resolves to itself). Navigating *into* the session's initial
root is never recorded in history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..entry_model import Entry
from ..errors import NavigationError, PathResolutionError
from ..sorting import order_entries
from ..traversal import Scanner
from .config import SessionConfig

logger = logging.getLogger(__name__)


class BackStep(Enum):
    ASCEND = "ascend"
    POP_HISTORY = "pop-history"
    STAY = "stay"


def resolved_parent(path: Path) -> Path | None:
    """Return the canonical parent of ``path`` or ``None`` when it cannot be resolved."""
    try:
        return path.parent.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def plan_back(current: Path, history: tuple[Path, ...] | list[Path]) -> BackStep:
    """Pick the back-navigation step for ``current`` per the transition table."""
    parent = resolved_parent(current)
    if parent is not None and parent != current:
        return BackStep.ASCEND
    if history:
        return BackStep.POP_HISTORY
    return BackStep.STAY


@dataclass(frozen=True)
class ScanSnapshot:
    """Immutable view of one completed scan.

    ``generation`` increases by one per successful scan so holders can tell
    when their copy is no longer the current view.
    """

    path: Path
    entries: tuple[Entry, ...]
    generation: int


class NavigationController:
    """Own the session location, its history, and the latest scan snapshot."""

    def __init__(self, config: SessionConfig, scanner: Scanner | None = None) -> None:
        """Canonicalize the session root and perform the first scan.

        Raises ``PathResolutionError`` if the root cannot be resolved; errors
        from the first scan propagate unchanged.
        """
        self.config = config
        self.scanner = scanner if scanner is not None else Scanner(config.scan)
        try:
            root = Path(config.root).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise PathResolutionError(f"Failed to resolve path {config.root}: {exc}") from exc
        self._initial_path = root
        self._current_path = root
        self._history: list[Path] = []
        self._snapshot = ScanSnapshot(path=root, entries=(), generation=0)
        self.scan_current_directory()

    @property
    def initial_path(self) -> Path:
        return self._initial_path

    @property
    def current_path(self) -> Path:
        return self._current_path

    @property
    def history(self) -> tuple[Path, ...]:
        return tuple(self._history)

    @property
    def snapshot(self) -> ScanSnapshot:
        return self._snapshot

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._snapshot.entries

    def scan_current_directory(self) -> None:
        """Rescan ``current_path`` and replace the snapshot.

        On failure the previous snapshot stays in place and the error
        propagates; the location is not reverted.
        """
        raw_entries = self.scanner.scan(self._current_path)
        ordered = order_entries(raw_entries, self.config.sort_key, self.config.sort_direction)
        self._snapshot = ScanSnapshot(
            path=self._current_path,
            entries=tuple(ordered),
            generation=self._snapshot.generation + 1,
        )

    def _move_to(self, target: Path) -> None:
        logger.info("navigating %s -> %s", self._current_path, target)
        self._current_path = target
        self.scan_current_directory()

    def navigate_into(self, path: Path) -> None:
        """Move to ``path`` (resolved) and rescan.

        Raises ``NavigationError`` when the target is missing or not a
        directory; nothing changes in that case.
        """
        try:
            target = Path(path).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise NavigationError(f"Path does not exist: {path}") from exc
        if not target.is_dir():
            raise NavigationError(f"Not a directory: {target}")

        if target != self._initial_path:
            self._history.append(self._current_path)
        self._move_to(target)

    def navigate_back(self) -> None:
        """Ascend one level, or replay history at the filesystem top.

        Raises ``NavigationError`` when the popped history entry no longer
        exists; the location is unchanged in that case.
        """
        step = plan_back(self._current_path, self._history)
        if step is BackStep.ASCEND:
            parent = resolved_parent(self._current_path)
            if parent is None:
                raise NavigationError(f"Failed to resolve parent of {self._current_path}")
            self._history.append(self._current_path)
            self._move_to(parent)
            return

        if step is BackStep.POP_HISTORY:
            previous = self._history.pop()
            if not previous.exists():
                raise NavigationError(f"Cannot navigate to non-existent path: {previous}")
            self._move_to(previous)


__all__ = [
    "BackStep",
    "NavigationController",
    "ScanSnapshot",
    "plan_back",
    "resolved_parent",
]
