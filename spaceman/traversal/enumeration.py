"""Depth-bounded candidate enumeration for one scan.

Children are visited in name order, depth-first pre-order. Symlinks are
never descended and directories on another device than the scan root are
neither listed nor descended. Filters are applied per node and never prune
descent.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..errors import TraversalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One enumerated path that passed the visibility filters."""

    path: Path
    depth: int
    is_symlink: bool


def passes_filters(name: str, show_hidden: bool, extension: str | None) -> bool:
    """Return whether a node named ``name`` should be listed."""
    if not show_hidden and name.startswith("."):
        return False
    if extension is None:
        return True
    suffix = Path(name).suffix
    return bool(suffix) and suffix[1:] == extension


def _sorted_children(directory: str) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda item: item.name)


def _children_or_empty(directory: str) -> list[os.DirEntry[str]]:
    try:
        return _sorted_children(directory)
    except OSError as exc:
        logger.debug("skipping unreadable directory %s: %s", directory, exc)
        return []


def enumerate_candidates(
    root: Path,
    max_depth: int,
    show_hidden: bool = False,
    extension: str | None = None,
) -> list[Candidate]:
    """List filtered candidates up to ``max_depth`` levels below ``root``.

    The root itself is never a candidate. Raises ``TraversalError`` when the
    root cannot be opened; failures below the root are skipped.
    """
    root_text = os.fspath(root)
    try:
        root_device = os.stat(root_text).st_dev
        root_children = _sorted_children(root_text)
    except OSError as exc:
        raise TraversalError(f"Cannot open directory {root}: {exc}") from exc

    candidates: list[Candidate] = []
    if max_depth < 1:
        return candidates

    stack: list[tuple[Iterator[os.DirEntry[str]], int]] = [(iter(root_children), 1)]
    while stack:
        children, depth = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            continue

        try:
            is_symlink = child.is_symlink()
            is_dir = child.is_dir(follow_symlinks=False)
            if is_dir and child.stat(follow_symlinks=False).st_dev != root_device:
                logger.debug("not crossing mount boundary at %s", child.path)
                continue
        except OSError as exc:
            logger.debug("skipping %s: %s", child.path, exc)
            continue

        if passes_filters(child.name, show_hidden, extension):
            candidates.append(Candidate(path=Path(child.path), depth=depth, is_symlink=is_symlink))

        if is_dir and depth < max_depth:
            stack.append((iter(_children_or_empty(child.path)), depth + 1))

    return candidates


__all__ = [
    "Candidate",
    "passes_filters",
    "enumerate_candidates",
]
