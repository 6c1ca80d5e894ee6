"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens
(``UP``, ``DOWN``, ``LEFT``, ``RIGHT``, ``ENTER``, ``ESC``, printable text).
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_ARROWS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_first_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    if timeout_ms is not None:
        return _read_ready_byte(fd, timeout_ms)
    ch = os.read(fd, 1)
    return ch or None


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when nothing arrived in time."""
    ch = _read_first_byte(fd, timeout_ms)
    if ch is None:
        return ""

    if ch in {b"\r", b"\n"}:
        return "ENTER"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\x03":
        return "CTRL_C"
    if ch == b"\t":
        return "TAB"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROWS:
        return _ARROWS[seq]
    if seq in {b"5", b"6"}:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return "PAGE_UP" if seq == b"5" else "PAGE_DOWN"
    return "ESC"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "read_key",
]
