"""Single ordering component for scan results.

Both the controller (session order) and the display layer (session-local
overrides) order entries through ``order_entries``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .entry_model import Entry
from .errors import ConfigurationError


class SortKey(Enum):
    """Selectable ordering keys."""

    DEFAULT = "default"
    SIZE = "size"
    NAME = "name"
    MODIFIED = "modified"

    @classmethod
    def parse(cls, value: str) -> SortKey:
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ConfigurationError(f"Invalid sort order: {value!r}. Must be one of: {choices}") from exc

    def next(self) -> SortKey:
        """Return the key after this one in the display cycle."""
        members = list(SortKey)
        return members[(members.index(self) + 1) % len(members)]


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str) -> SortDirection:
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ConfigurationError(f"Invalid sort direction: {value!r}. Must be one of: asc, desc") from exc

    @property
    def descending(self) -> bool:
        return self is SortDirection.DESC


def _name_key(entry: Entry) -> tuple[str, str]:
    return entry.name, str(entry.path)


def _directories_first(entries: list[Entry], descending: bool) -> list[Entry]:
    directories = sorted((entry for entry in entries if entry.is_dir), key=_name_key, reverse=descending)
    files = sorted((entry for entry in entries if not entry.is_dir), key=_name_key, reverse=descending)
    return directories + files


def order_entries(
    entries: Iterable[Entry],
    key: SortKey,
    direction: SortDirection = SortDirection.ASC,
) -> list[Entry]:
    """Return a new list of ``entries`` ordered by ``key`` and ``direction``.

    ``DEFAULT`` always lists directories before files; direction only flips
    the name order inside each group. Size and modification-time ties keep
    their input order.
    """
    items = list(entries)
    descending = direction is SortDirection.DESC
    if key is SortKey.DEFAULT:
        return _directories_first(items, descending)
    if key is SortKey.SIZE:
        return sorted(items, key=lambda entry: entry.size, reverse=descending)
    if key is SortKey.NAME:
        return sorted(items, key=_name_key, reverse=descending)
    if key is SortKey.MODIFIED:
        return sorted(items, key=lambda entry: entry.modified, reverse=descending)
    return _directories_first(items, descending=False)


__all__ = [
    "SortKey",
    "SortDirection",
    "order_entries",
]
