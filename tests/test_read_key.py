"""Tests for raw key decoding."""

from __future__ import annotations

import os
import unittest

from spaceman import input as key_input
from spaceman.input import read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        key_input._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)
        key_input._PENDING_BYTES.clear()

    def _keys(self, payload: bytes, count: int) -> list[str]:
        os.write(self.write_fd, payload)
        return [read_key(self.read_fd, timeout_ms=50) for _ in range(count)]

    def test_control_bytes(self) -> None:
        self.assertEqual(
            self._keys(b"\r\n\x7f\x08\x03\t", 6),
            ["ENTER", "ENTER", "BACKSPACE", "BACKSPACE", "CTRL_C", "TAB"],
        )

    def test_printable_text(self) -> None:
        self.assertEqual(self._keys(b"qsR", 3), ["q", "s", "R"])

    def test_arrow_and_navigation_sequences(self) -> None:
        payload = b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F\x1bOA\x1b[5~\x1b[6~"

        self.assertEqual(
            self._keys(payload, 9),
            ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END", "UP", "PAGE_UP", "PAGE_DOWN"],
        )

    def test_lone_escape(self) -> None:
        self.assertEqual(self._keys(b"\x1b", 1), ["ESC"])

    def test_escape_followed_by_text_keeps_the_text(self) -> None:
        self.assertEqual(self._keys(b"\x1bq", 2), ["ESC", "q"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")


if __name__ == "__main__":
    unittest.main()
