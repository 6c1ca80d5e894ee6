"""Row and frame rendering for the explorer list.

Pure string builders: nothing here touches the terminal. The runtime loop
writes the frame produced by ``build_frame``; ``--list`` prints
``render_listing``.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .ansi import clip_ansi_line
from .entry_model import Entry
from .sorting import SortKey

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
DIR_MARKER = "[ / ]"
FILE_MARKER = "[ # ]"
PERMISSION_ARROW = "⮕"
HELP_KEYS = "↑/↓: Navigate | ←/→: Back / Forward | q / esc: Quit"


@dataclass(frozen=True)
class UITheme:
    """ANSI palette used by renderers."""

    reset: str
    reverse: str
    title: str
    directory: str
    size: str
    dim: str
    status: str


DEFAULT_THEME = UITheme(
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;38;5;81m",
    directory="\033[38;5;117m",
    size="\033[38;5;109m",
    dim="\033[2;38;5;250m",
    status="\033[38;5;214m",
)

PLAIN_THEME = UITheme(reset="", reverse="", title="", directory="", size="", dim="", status="")


def format_size(size_bytes: int) -> str:
    """Format bytes with binary units (``512 B``, ``1.5 KB``, ``3.0 MB``)."""
    size_bytes = max(0, int(size_bytes))
    if size_bytes < 1024:
        return f"{size_bytes} B"
    value = float(size_bytes)
    for unit in SIZE_UNITS[1:]:
        value /= 1024.0
        if value < 1024.0 or unit == SIZE_UNITS[-1]:
            return f"{value:.1f} {unit}"
    return f"{value:.1f} {SIZE_UNITS[-1]}"


def format_age(seconds: float) -> str:
    """Format an elapsed duration coarsely (``45s``, ``3m``, ``2h``, ``5d``, ``3mo``, ``2y``)."""
    total = max(0, int(seconds))
    if total < 60:
        return f"{total}s"
    if total < 3600:
        return f"{total // 60}m"
    if total < 86400:
        return f"{total // 3600}h"
    days = total // 86400
    if days < 30:
        return f"{days}d"
    if days < 365:
        return f"{days // 30}mo"
    return f"{days // 365}y"


def display_name(entry: Entry, base: Path) -> str:
    """Return ``entry``'s path relative to ``base`` when below it, else absolute."""
    try:
        return entry.path.relative_to(base).as_posix()
    except ValueError:
        return str(entry.path)


def format_entry_row(
    entry: Entry,
    base: Path,
    *,
    show_permissions: bool = True,
    show_modified: bool = True,
    now: float | None = None,
    theme: UITheme = PLAIN_THEME,
) -> str:
    """Render ``perms  ⮕  [ / ] name (size) [age ago]`` for one entry."""
    name = display_name(entry, base)
    if entry.is_dir:
        label = f"{DIR_MARKER} {theme.directory}{name}{theme.reset}"
    else:
        label = f"{FILE_MARKER} {name}"
    parts: list[str] = []
    if show_permissions:
        parts.append(f"{entry.permissions}  {PERMISSION_ARROW}  ")
    parts.append(label)
    parts.append(f" {theme.size}({format_size(entry.size)}){theme.reset}")
    if show_modified:
        now = time.time() if now is None else now
        if now >= entry.modified:
            parts.append(f" [{format_age(now - entry.modified)} ago]")
    return "".join(parts)


def help_line(sort_key: SortKey, filter_extension: str | None) -> str:
    return (
        f"{HELP_KEYS} | s: Sort ({sort_key.value}) | "
        f"f: Filter ({filter_extension or 'none'}) | r: Reset filter"
    )


def title_line(path: Path) -> str:
    return f"⯈ {path} ⯇"


def build_frame(
    rows: Sequence[str],
    *,
    title: str,
    help_text: str,
    status: str,
    selected_row: int | None,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Lay out title, list viewport, status, and help into ``height`` screen lines.

    ``rows`` are the already-windowed list rows; ``selected_row`` indexes into them.
    """
    width = max(1, width)
    list_rows = max(1, height - 3)
    out = [clip_ansi_line(f"{theme.title}{title}{theme.reset}", width)]
    for idx in range(list_rows):
        if idx >= len(rows):
            out.append("")
            continue
        row = clip_ansi_line(rows[idx], width)
        if idx == selected_row and theme.reverse:
            # Re-apply reverse video after inline resets from directory colors.
            row = theme.reverse + row.replace(theme.reset, theme.reset + theme.reverse) + theme.reset
        out.append(row)
    out.append(clip_ansi_line(f"{theme.status}{status}{theme.reset}", width) if status else "")
    out.append(clip_ansi_line(f"{theme.dim}{help_text}{theme.reset}", width))
    return out


def render_listing(
    entries: Sequence[Entry],
    base: Path,
    *,
    show_permissions: bool = True,
    show_modified: bool = True,
    now: float | None = None,
    theme: UITheme = PLAIN_THEME,
) -> str:
    """Render a full non-interactive listing, one row per entry."""
    now = time.time() if now is None else now
    lines = [
        format_entry_row(
            entry,
            base,
            show_permissions=show_permissions,
            show_modified=show_modified,
            now=now,
            theme=theme,
        )
        for entry in entries
    ]
    return "".join(f"{line}\n" for line in lines)


__all__ = [
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "UITheme",
    "build_frame",
    "display_name",
    "format_age",
    "format_entry_row",
    "format_size",
    "help_line",
    "render_listing",
    "title_line",
]
