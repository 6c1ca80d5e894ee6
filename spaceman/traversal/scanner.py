"""Two-phase directory scan: enumerate candidates, then measure them in parallel.

Phase 1 is sequential and depth-bounded (see ``enumeration``). Phase 2 splits
candidates into fixed-size batches measured concurrently on a thread pool;
batches share no mutable state and results are concatenated at the end. The
returned order is not meaningful; callers sort through ``spaceman.sorting``.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..entry_model import Entry, entry_from_stat
from .enumeration import Candidate, enumerate_candidates
from .usage import UsageIndex, directory_usage

logger = logging.getLogger(__name__)

AGGREGATION_BATCH_SIZE = 64


class AggregationStrategy(Enum):
    """How directory sizes are aggregated during phase 2."""

    PER_DIRECTORY = "per-directory"
    SINGLE_PASS = "single-pass"


@dataclass(frozen=True)
class ScanOptions:
    """Depth and filter settings applied to every scan of a session."""

    max_depth: int
    show_hidden: bool = False
    extension: str | None = None
    strategy: AggregationStrategy = AggregationStrategy.PER_DIRECTORY


def measure_candidate(candidate: Candidate, usage_of: Callable[[Path], int]) -> Entry | None:
    """Build the entry for one candidate, or ``None`` when it must be skipped.

    Symlinks describe their resolved target; unresolvable links are skipped.
    """
    path = candidate.path
    try:
        if candidate.is_symlink:
            path = path.resolve(strict=True)
        node_stat = os.stat(path)
    except (OSError, RuntimeError) as exc:
        logger.debug("skipping candidate %s: %s", candidate.path, exc)
        return None

    if stat.S_ISDIR(node_stat.st_mode):
        return entry_from_stat(path, node_stat, size=usage_of(path))
    return entry_from_stat(path, node_stat)


def _measure_batch(batch: list[Candidate], usage_of: Callable[[Path], int]) -> list[Entry]:
    out: list[Entry] = []
    for candidate in batch:
        entry = measure_candidate(candidate, usage_of)
        if entry is not None:
            out.append(entry)
    return out


class Scanner:
    """Scan directories with fixed depth/filter options."""

    def __init__(
        self,
        options: ScanOptions,
        *,
        batch_size: int = AGGREGATION_BATCH_SIZE,
        max_workers: int | None = None,
    ) -> None:
        self.options = options
        self.batch_size = max(1, batch_size)
        self.max_workers = max_workers

    def scan(self, root: Path) -> list[Entry]:
        """Return entries below ``root`` up to the configured depth.

        Raises ``TraversalError`` only when ``root`` itself cannot be opened.
        """
        started = time.monotonic()
        root = Path(root).resolve()
        options = self.options
        candidates = enumerate_candidates(
            root,
            options.max_depth,
            show_hidden=options.show_hidden,
            extension=options.extension,
        )
        if not candidates:
            return []

        usage_of: Callable[[Path], int] = directory_usage
        if options.strategy is AggregationStrategy.SINGLE_PASS:
            usage_of = UsageIndex.build(root).usage_of

        batches = [
            candidates[start : start + self.batch_size]
            for start in range(0, len(candidates), self.batch_size)
        ]
        entries: list[Entry] = []
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="spaceman-scan") as executor:
            futures = [executor.submit(_measure_batch, batch, usage_of) for batch in batches]
            for future in futures:
                entries.extend(future.result())

        logger.debug(
            "scanned %s: %d candidates in %d batches, %d entries, %.3fs",
            root,
            len(candidates),
            len(batches),
            len(entries),
            time.monotonic() - started,
        )
        return entries


def scan(
    root: Path,
    max_depth: int,
    show_hidden: bool = False,
    extension: str | None = None,
) -> list[Entry]:
    """Convenience wrapper around ``Scanner(...).scan(root)``."""
    options = ScanOptions(max_depth=max_depth, show_hidden=show_hidden, extension=extension)
    return Scanner(options).scan(root)


__all__ = [
    "AGGREGATION_BATCH_SIZE",
    "AggregationStrategy",
    "ScanOptions",
    "Scanner",
    "measure_candidate",
    "scan",
]
