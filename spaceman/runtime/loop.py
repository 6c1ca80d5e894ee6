"""Interactive explorer session and its main loop.

``ExplorerSession`` holds the wiring between keys, the display view, and the
navigation controller and is terminal-free so it can be unit tested.
``run_main_loop`` only reads keys, feeds the session, and draws frames.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import SpacemanError
from ..input import read_key
from ..render import DEFAULT_THEME, UITheme, build_frame, format_entry_row, help_line, title_line
from .config import DisplayOptions
from .navigation import NavigationController
from .terminal import TerminalController
from .view import ExplorerView

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0
KEY_POLL_TIMEOUT_MS = 100
# Title, status and help rows surround the list viewport.
CHROME_ROWS = 3


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens mapped to a session action."""

    keys: tuple[str, ...]
    action: Callable[[], bool]


class ExplorerSession:
    """Dispatch key tokens to view/controller actions and build frames."""

    def __init__(
        self,
        controller: NavigationController,
        view: ExplorerView,
        display: DisplayOptions,
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.controller = controller
        self.view = view
        self.display = display
        self.theme = theme
        self.page_rows = 10
        self.running = True
        self.status_message = ""
        self.status_message_until = 0.0
        self.view.sync(controller.snapshot)
        self._bindings: dict[str, Callable[[], bool]] = {}
        for binding in self._default_bindings():
            for key in binding.keys:
                self._bindings[key] = binding.action

    def _default_bindings(self) -> tuple[KeyBinding, ...]:
        return (
            KeyBinding(("q", "ESC", "CTRL_C"), self.quit),
            KeyBinding(("UP", "k"), lambda: self.view.move_selection(-1)),
            KeyBinding(("DOWN", "j"), lambda: self.view.move_selection(1)),
            KeyBinding(("PAGE_UP",), lambda: self.view.move_selection(-self.page_rows)),
            KeyBinding(("PAGE_DOWN",), lambda: self.view.move_selection(self.page_rows)),
            KeyBinding(("HOME", "g"), lambda: self.view.move_selection(-len(self.view.visible_entries()))),
            KeyBinding(("END", "G"), lambda: self.view.move_selection(len(self.view.visible_entries()))),
            KeyBinding(("LEFT", "h", "BACKSPACE"), self.go_back),
            KeyBinding(("RIGHT", "l", "ENTER"), self.open_selected),
            KeyBinding(("s",), self.cycle_sort),
            KeyBinding(("f",), self.cycle_filter),
            KeyBinding(("r",), self.reset_filter),
            KeyBinding(("R",), self.rescan),
        )

    def show_status(self, message: str, now: float | None = None) -> None:
        now = time.monotonic() if now is None else now
        self.status_message = message
        self.status_message_until = now + STATUS_MESSAGE_SECONDS

    def _report(self, action: str, exc: SpacemanError) -> None:
        logger.warning("%s failed: %s", action, exc)
        self.show_status(f"Error {action}: {exc}")

    def _after_navigation(self) -> None:
        self.view.sync(self.controller.snapshot)
        self.view.reset_selection()

    def quit(self) -> bool:
        self.running = False
        return True

    def go_back(self) -> bool:
        try:
            self.controller.navigate_back()
        except SpacemanError as exc:
            self._report("navigating back", exc)
        self._after_navigation()
        return True

    def open_selected(self) -> bool:
        entry = self.view.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        try:
            self.controller.navigate_into(entry.path)
        except SpacemanError as exc:
            self._report("navigating to directory", exc)
        self._after_navigation()
        return True

    def rescan(self) -> bool:
        try:
            self.controller.scan_current_directory()
        except SpacemanError as exc:
            self._report("rescanning", exc)
        self.view.sync(self.controller.snapshot)
        return True

    def cycle_sort(self) -> bool:
        self.view.cycle_sort()
        return True

    def cycle_filter(self) -> bool:
        self.view.cycle_extension_filter()
        return True

    def reset_filter(self) -> bool:
        self.view.reset_filter()
        return True

    def handle_key(self, key: str) -> bool:
        """Dispatch ``key``; return whether anything needs redrawing."""
        action = self._bindings.get(key)
        if action is None:
            return False
        return bool(action())

    def expire_status(self, now: float) -> bool:
        if self.status_message and now >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0
            return True
        return False

    def frame_lines(self, width: int, height: int, now: float | None = None) -> list[str]:
        """Build the full screen for a ``width`` x ``height`` terminal."""
        visible_rows = max(1, height - CHROME_ROWS)
        self.page_rows = visible_rows
        view = self.view
        view.scroll_into_view(visible_rows)
        entries = view.visible_entries()[view.list_start : view.list_start + visible_rows]
        wall_now = time.time() if now is None else now
        rows = [
            format_entry_row(
                entry,
                self.controller.current_path,
                show_permissions=self.display.show_permissions,
                show_modified=self.display.show_modified,
                now=wall_now,
                theme=self.theme,
            )
            for entry in entries
        ]
        selected_row = view.selected_idx - view.list_start if entries else None
        return build_frame(
            rows,
            title=title_line(self.controller.current_path),
            help_text=help_line(view.sort_key, view.filter_extension),
            status=self.status_message,
            selected_row=selected_row,
            width=width,
            height=height,
            theme=self.theme,
        )


def run_main_loop(session: ExplorerSession, terminal: TerminalController, stdin_fd: int) -> None:
    """Run the interactive loop until a quit action occurs."""
    last_size: tuple[int, int] | None = None
    dirty = True
    with terminal.raw_mode():
        while session.running:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                dirty = True
            if session.expire_status(time.monotonic()):
                dirty = True
            if dirty:
                terminal.write_frame(session.frame_lines(term.columns, term.lines))
                dirty = False

            key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            if key:
                dirty = session.handle_key(key)


__all__ = [
    "CHROME_ROWS",
    "ExplorerSession",
    "KeyBinding",
    "run_main_loop",
]
