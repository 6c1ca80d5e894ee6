"""Tests for the shared sort engine."""

from __future__ import annotations

import unittest
from pathlib import Path

from spaceman.entry_model import Entry, EntryKind
from spaceman.errors import ConfigurationError
from spaceman.sorting import SortDirection, SortKey, order_entries


def _entry(name: str, *, is_dir: bool = False, size: int = 0, modified: float = 0.0, parent: str = "/data") -> Entry:
    return Entry(
        path=Path(parent) / name,
        name=name,
        kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
        size=size,
        modified=modified,
        permissions="drwxr-xr-x" if is_dir else "-rw-r--r--",
    )


def _names(entries: list[Entry]) -> list[str]:
    return [entry.name for entry in entries]


class DefaultOrderTests(unittest.TestCase):
    def test_directories_come_first_even_when_file_name_is_earlier(self) -> None:
        entries = [_entry("aaa.txt"), _entry("zzz", is_dir=True)]

        self.assertEqual(_names(order_entries(entries, SortKey.DEFAULT, SortDirection.ASC)), ["zzz", "aaa.txt"])
        self.assertEqual(_names(order_entries(entries, SortKey.DEFAULT, SortDirection.DESC)), ["zzz", "aaa.txt"])

    def test_direction_only_flips_names_within_each_kind(self) -> None:
        entries = [
            _entry("b.txt"),
            _entry("y", is_dir=True),
            _entry("a.txt"),
            _entry("x", is_dir=True),
        ]

        ascending = _names(order_entries(entries, SortKey.DEFAULT, SortDirection.ASC))
        descending = _names(order_entries(entries, SortKey.DEFAULT, SortDirection.DESC))

        self.assertEqual(ascending, ["x", "y", "a.txt", "b.txt"])
        self.assertEqual(descending, ["y", "x", "b.txt", "a.txt"])

    def test_unknown_key_falls_back_to_directories_first_ascending(self) -> None:
        entries = [_entry("b.txt"), _entry("z", is_dir=True), _entry("a.txt")]

        ordered = order_entries(entries, "bogus", SortDirection.DESC)  # type: ignore[arg-type]

        self.assertEqual(_names(ordered), ["z", "a.txt", "b.txt"])


class KeyedOrderTests(unittest.TestCase):
    def test_size_descending(self) -> None:
        entries = [_entry("small", size=1), _entry("large", size=100), _entry("medium", size=10)]

        self.assertEqual(_names(order_entries(entries, SortKey.SIZE, SortDirection.DESC)), ["large", "medium", "small"])
        self.assertEqual(_names(order_entries(entries, SortKey.SIZE, SortDirection.ASC)), ["small", "medium", "large"])

    def test_size_ties_keep_source_order_in_both_directions(self) -> None:
        entries = [_entry("first", size=5), _entry("second", size=5), _entry("big", size=9)]

        self.assertEqual(_names(order_entries(entries, SortKey.SIZE, SortDirection.ASC)), ["first", "second", "big"])
        self.assertEqual(_names(order_entries(entries, SortKey.SIZE, SortDirection.DESC)), ["big", "first", "second"])

    def test_name_ignores_kind(self) -> None:
        entries = [_entry("b", is_dir=True), _entry("a.txt"), _entry("c.txt")]

        self.assertEqual(_names(order_entries(entries, SortKey.NAME, SortDirection.ASC)), ["a.txt", "b", "c.txt"])
        self.assertEqual(_names(order_entries(entries, SortKey.NAME, SortDirection.DESC)), ["c.txt", "b", "a.txt"])

    def test_name_ties_broken_by_path(self) -> None:
        deep = _entry("readme", parent="/data/z")
        shallow = _entry("readme", parent="/data/a")

        ordered = order_entries([deep, shallow], SortKey.NAME, SortDirection.ASC)

        self.assertEqual([entry.path for entry in ordered], [shallow.path, deep.path])

    def test_modified(self) -> None:
        entries = [_entry("new", modified=300.0), _entry("old", modified=100.0), _entry("mid", modified=200.0)]

        self.assertEqual(_names(order_entries(entries, SortKey.MODIFIED, SortDirection.ASC)), ["old", "mid", "new"])
        self.assertEqual(_names(order_entries(entries, SortKey.MODIFIED, SortDirection.DESC)), ["new", "mid", "old"])

    def test_input_is_not_mutated(self) -> None:
        entries = [_entry("b", size=1), _entry("a", size=2)]
        snapshot = list(entries)

        order_entries(entries, SortKey.SIZE, SortDirection.DESC)

        self.assertEqual(entries, snapshot)


class ParseTests(unittest.TestCase):
    def test_parse_accepts_known_values(self) -> None:
        self.assertIs(SortKey.parse("size"), SortKey.SIZE)
        self.assertIs(SortKey.parse("Modified"), SortKey.MODIFIED)
        self.assertIs(SortDirection.parse("asc"), SortDirection.ASC)

    def test_parse_rejects_unknown_values(self) -> None:
        with self.assertRaises(ConfigurationError):
            SortKey.parse("color")
        with self.assertRaises(ConfigurationError):
            SortDirection.parse("up")

    def test_sort_cycle(self) -> None:
        self.assertIs(SortKey.DEFAULT.next(), SortKey.SIZE)
        self.assertIs(SortKey.SIZE.next(), SortKey.NAME)
        self.assertIs(SortKey.NAME.next(), SortKey.MODIFIED)
        self.assertIs(SortKey.MODIFIED.next(), SortKey.DEFAULT)


if __name__ == "__main__":
    unittest.main()
