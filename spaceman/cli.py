"""Command-line front door for spaceman.

Parses CLI options layered over the user defaults file, validates them into a
``SessionConfig``, then either prints a listing or launches the explorer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from .errors import ConfigurationError, PathResolutionError, TraversalError
from .render import DEFAULT_THEME, PLAIN_THEME, render_listing
from .runtime import run_explorer
from .runtime.config import DEFAULT_DEPTH, DEFAULT_ORDER, DEFAULT_SORT, SessionConfig, load_defaults
from .runtime.navigation import NavigationController

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser(defaults: dict[str, object] | None = None) -> argparse.ArgumentParser:
    """Build the argument parser, seeding defaults from the user config."""
    defaults = defaults or {}
    parser = argparse.ArgumentParser(
        prog="spaceman",
        description="A terminal-based file system explorer showing on-disk usage.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path to scan. Defaults to current directory.")
    parser.add_argument(
        "-d",
        "--depth",
        type=int,
        default=defaults.get("depth", DEFAULT_DEPTH),
        help="Maximum depth to scan.",
    )
    parser.add_argument(
        "-s",
        "--sort",
        default=defaults.get("sort", DEFAULT_SORT),
        help="Sort order (size, name, modified, default).",
    )
    parser.add_argument(
        "-o",
        "--order",
        default=defaults.get("order", DEFAULT_ORDER),
        help="Sort direction (asc, desc).",
    )
    parser.add_argument("-a", "--all", action="store_true", default=defaults.get("all", False), help="Show hidden files.")
    parser.add_argument(
        "-p",
        "--no-permissions",
        action="store_true",
        default=defaults.get("no_permissions", False),
        help="Hide file permissions.",
    )
    parser.add_argument(
        "-m",
        "--no-modified",
        action="store_true",
        default=defaults.get("no_modified", False),
        help="Hide last modified time.",
    )
    parser.add_argument("-e", "--ext", default=defaults.get("ext"), help="Filter by file extension (without dot).")
    parser.add_argument(
        "--single-pass",
        action="store_true",
        default=defaults.get("single_pass", False),
        help="Aggregate directory sizes in one bottom-up walk.",
    )
    parser.add_argument("--list", action="store_true", help="Print the listing and exit instead of exploring.")
    parser.add_argument("--log-file", default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, help="Log level for --log-file.")
    return parser


def configure_logging(log_file: str | None, level: str = "INFO") -> None:
    """Attach a file handler to the package logger when ``log_file`` is given.

    Logging never goes to stderr because the explorer owns the terminal.
    """
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("spaceman")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def print_listing(config: SessionConfig, stream: TextIO | None = None) -> None:
    """Scan ``config.root`` once and print the ordered listing."""
    stream = sys.stdout if stream is None else stream
    controller = NavigationController(config)
    is_tty = getattr(stream, "isatty", lambda: False)()
    stream.write(
        render_listing(
            controller.entries,
            controller.current_path,
            show_permissions=config.display.show_permissions,
            show_modified=config.display.show_modified,
            theme=DEFAULT_THEME if is_tty else PLAIN_THEME,
        )
    )


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and explore (or list) the target directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = build_parser(load_defaults())
    args = parser.parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if default_path is None:
        default_path = Path.cwd()
    try:
        config = SessionConfig.from_values(
            path=args.path if args.path is not None else default_path,
            depth=args.depth,
            sort=args.sort,
            order=args.order,
            show_hidden=args.all,
            extension=args.ext,
            show_permissions=not args.no_permissions,
            show_modified=not args.no_modified,
            single_pass=args.single_pass,
        )
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    try:
        if args.list:
            print_listing(config)
            return
        run_explorer(config)
    except (PathResolutionError, TraversalError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
