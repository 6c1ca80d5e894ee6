"""Session-local display overrides layered over the controller snapshot.

The view never mutates the snapshot; it filters and reorders copies through
the shared sort engine.
"""

from __future__ import annotations

from ..entry_model import Entry
from ..sorting import SortDirection, SortKey, order_entries
from .navigation import ScanSnapshot


def available_extensions(entries: tuple[Entry, ...] | list[Entry]) -> list[str]:
    """Return the sorted, de-duplicated extensions present in ``entries``."""
    return sorted({entry.extension for entry in entries if entry.extension})


class ExplorerView:
    """Selection, sort override, and extension-filter override for one session."""

    def __init__(self, sort_key: SortKey, sort_direction: SortDirection) -> None:
        self.sort_key = sort_key
        self.sort_direction = sort_direction
        self.filter_extension: str | None = None
        self.selected_idx = 0
        self.list_start = 0
        self._extensions: list[str] = []
        self._generation: int | None = None
        self._snapshot: ScanSnapshot | None = None
        self._visible: list[Entry] = []

    @property
    def extensions(self) -> list[str]:
        return list(self._extensions)

    def sync(self, snapshot: ScanSnapshot) -> None:
        """Adopt ``snapshot`` if it is newer than the one last seen."""
        if snapshot.generation == self._generation:
            return
        self._snapshot = snapshot
        self._generation = snapshot.generation
        self._extensions = available_extensions(snapshot.entries)
        if self.filter_extension is not None and self.filter_extension not in self._extensions:
            self.filter_extension = None
        self._refresh()

    def _refresh(self) -> None:
        entries: tuple[Entry, ...] = self._snapshot.entries if self._snapshot is not None else ()
        if self.filter_extension is not None:
            entries = tuple(entry for entry in entries if entry.extension == self.filter_extension)
        self._visible = order_entries(entries, self.sort_key, self.sort_direction)
        self.clamp_selection()

    def visible_entries(self) -> list[Entry]:
        return list(self._visible)

    def selected_entry(self) -> Entry | None:
        if not self._visible:
            return None
        return self._visible[self.selected_idx]

    def clamp_selection(self) -> None:
        self.selected_idx = max(0, min(self.selected_idx, len(self._visible) - 1))

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` rows; return whether it changed."""
        previous = self.selected_idx
        self.selected_idx += delta
        self.clamp_selection()
        return self.selected_idx != previous

    def reset_selection(self) -> None:
        self.selected_idx = 0
        self.list_start = 0

    def cycle_sort(self) -> SortKey:
        self.sort_key = self.sort_key.next()
        self._refresh()
        return self.sort_key

    def cycle_extension_filter(self) -> str | None:
        """Advance ``None -> ext1 -> ... -> extN -> None``."""
        if not self._extensions:
            self.filter_extension = None
        elif self.filter_extension is None:
            self.filter_extension = self._extensions[0]
        else:
            idx = self._extensions.index(self.filter_extension) + 1
            self.filter_extension = self._extensions[idx] if idx < len(self._extensions) else None
        self.reset_selection()
        self._refresh()
        return self.filter_extension

    def reset_filter(self) -> None:
        self.filter_extension = None
        self.reset_selection()
        self._refresh()

    def scroll_into_view(self, visible_rows: int) -> None:
        """Adjust ``list_start`` so the selected row is inside the viewport."""
        visible_rows = max(1, visible_rows)
        if self.selected_idx < self.list_start:
            self.list_start = self.selected_idx
        elif self.selected_idx >= self.list_start + visible_rows:
            self.list_start = self.selected_idx - visible_rows + 1
        self.list_start = max(0, min(self.list_start, max(0, len(self._visible) - visible_rows)))


__all__ = [
    "ExplorerView",
    "available_extensions",
]
