"""Runtime composition: build controller, view, and terminal, then run the loop."""

from __future__ import annotations

import sys

from .config import SessionConfig
from .loop import ExplorerSession, run_main_loop
from .navigation import NavigationController
from .terminal import TerminalController
from .view import ExplorerView


def run_explorer(config: SessionConfig) -> None:
    """Start an interactive session rooted at ``config.root``.

    Resolution and first-scan errors propagate before the terminal is touched.
    """
    controller = NavigationController(config)
    view = ExplorerView(config.sort_key, config.sort_direction)
    session = ExplorerSession(controller, view, config.display)

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd=stdin_fd, stdout_fd=sys.stdout.fileno())
    run_main_loop(session, terminal, stdin_fd)
