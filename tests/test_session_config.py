"""Tests for session-config validation and the read-only defaults file."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from spaceman.errors import ConfigurationError
from spaceman.runtime import config
from spaceman.runtime.config import SessionConfig
from spaceman.sorting import SortDirection, SortKey
from spaceman.traversal import AggregationStrategy


class SessionConfigTests(unittest.TestCase):
    def test_from_values_builds_closed_variants(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            session = SessionConfig.from_values(
                path=tmp,
                depth=3,
                sort="name",
                order="asc",
                show_hidden=True,
                extension="py",
                show_permissions=False,
                single_pass=True,
            )

        self.assertEqual(session.root, Path(tmp))
        self.assertEqual(session.scan.max_depth, 3)
        self.assertTrue(session.scan.show_hidden)
        self.assertEqual(session.scan.extension, "py")
        self.assertIs(session.scan.strategy, AggregationStrategy.SINGLE_PASS)
        self.assertIs(session.sort_key, SortKey.NAME)
        self.assertIs(session.sort_direction, SortDirection.ASC)
        self.assertFalse(session.display.show_permissions)
        self.assertTrue(session.display.show_modified)

    def test_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            session = SessionConfig.from_values(path=tmp)

        self.assertEqual(session.scan.max_depth, 2)
        self.assertIs(session.sort_key, SortKey.SIZE)
        self.assertIs(session.sort_direction, SortDirection.DESC)
        self.assertIsNone(session.scan.extension)
        self.assertIs(session.scan.strategy, AggregationStrategy.PER_DIRECTORY)

    def test_invalid_values_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cases = [
                dict(path=Path(tmp) / "missing"),
                dict(path=tmp, depth=0),
                dict(path=tmp, depth=True),
                dict(path=tmp, sort="colour"),
                dict(path=tmp, order="sideways"),
                dict(path=tmp, extension=".txt"),
                dict(path=tmp, extension="tar.gz"),
            ]
            for kwargs in cases:
                with self.subTest(kwargs=kwargs):
                    with self.assertRaises(ConfigurationError):
                        SessionConfig.from_values(**kwargs)

    def test_empty_extension_means_no_filter(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            session = SessionConfig.from_values(path=tmp, extension="")
        self.assertIsNone(session.scan.extension)


class DefaultsFileTests(unittest.TestCase):
    def test_load_defaults_keeps_only_well_typed_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps(
                    {
                        "depth": 4,
                        "sort": "name",
                        "order": 5,
                        "all": True,
                        "ext": "md",
                        "no_modified": "yes",
                        "unrelated": [1, 2],
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch.object(config, "CONFIG_PATH", config_path):
                defaults = config.load_defaults()

        self.assertEqual(defaults, {"depth": 4, "sort": "name", "all": True, "ext": "md"})

    def test_boolean_depth_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"depth": True}), encoding="utf-8")
            with mock.patch.object(config, "CONFIG_PATH", config_path):
                self.assertEqual(config.load_defaults(), {})

    def test_missing_or_malformed_file_gives_empty_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.json"
            malformed = Path(tmp) / "bad.json"
            malformed.write_text("{not json", encoding="utf-8")
            listed = Path(tmp) / "list.json"
            listed.write_text("[1, 2]", encoding="utf-8")

            for path in (missing, malformed, listed):
                with self.subTest(path=path.name), mock.patch.object(config, "CONFIG_PATH", path):
                    self.assertEqual(config.load_config(), {})
                    self.assertEqual(config.load_defaults(), {})


if __name__ == "__main__":
    unittest.main()
