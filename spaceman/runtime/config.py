"""Session configuration and the optional user defaults file.

``SessionConfig.from_values`` is the one place where raw option values are
validated and turned into closed variants. The defaults file is read only;
malformed or missing config falls back silently to built-in defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..errors import ConfigurationError
from ..sorting import SortDirection, SortKey
from ..traversal import AggregationStrategy, ScanOptions

APP_NAME = "spaceman"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DEPTH = 2
DEFAULT_SORT = "size"
DEFAULT_ORDER = "desc"


def load_config() -> dict[str, object]:
    """Load the user defaults JSON object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _typed(data: dict[str, object], key: str, expected: type) -> object | None:
    value = data.get(key)
    # bool is an int subclass; never let true/false stand in for a depth.
    if expected is int and isinstance(value, bool):
        return None
    return value if isinstance(value, expected) else None


def load_defaults() -> dict[str, object]:
    """Return user defaults keyed like the CLI options, dropping bad values."""
    data = load_config()
    out: dict[str, object] = {}
    for key, expected in (
        ("depth", int),
        ("sort", str),
        ("order", str),
        ("all", bool),
        ("ext", str),
        ("no_permissions", bool),
        ("no_modified", bool),
        ("single_pass", bool),
    ):
        value = _typed(data, key, expected)
        if value is not None:
            out[key] = value
    return out


@dataclass(frozen=True)
class DisplayOptions:
    show_permissions: bool = True
    show_modified: bool = True


@dataclass(frozen=True)
class SessionConfig:
    """Validated configuration for one explorer session."""

    root: Path
    scan: ScanOptions
    sort_key: SortKey = SortKey.SIZE
    sort_direction: SortDirection = SortDirection.DESC
    display: DisplayOptions = DisplayOptions()

    @classmethod
    def from_values(
        cls,
        *,
        path: str | Path,
        depth: int = DEFAULT_DEPTH,
        sort: str = DEFAULT_SORT,
        order: str = DEFAULT_ORDER,
        show_hidden: bool = False,
        extension: str | None = None,
        show_permissions: bool = True,
        show_modified: bool = True,
        single_pass: bool = False,
    ) -> SessionConfig:
        """Validate raw option values, raising ``ConfigurationError`` on the first problem."""
        root = Path(path).expanduser()
        if not root.exists():
            raise ConfigurationError(f"Path does not exist: {path}")
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ConfigurationError("Depth must be greater than 0")
        sort_key = SortKey.parse(sort)
        sort_direction = SortDirection.parse(order)
        if extension is not None:
            if not extension:
                extension = None
            elif extension.startswith("."):
                raise ConfigurationError(f"Extension filter must not start with a dot: {extension!r}")
            elif "/" in extension or "." in extension:
                raise ConfigurationError(f"Invalid extension filter: {extension!r}")

        strategy = AggregationStrategy.SINGLE_PASS if single_pass else AggregationStrategy.PER_DIRECTORY
        return cls(
            root=root,
            scan=ScanOptions(
                max_depth=depth,
                show_hidden=bool(show_hidden),
                extension=extension,
                strategy=strategy,
            ),
            sort_key=sort_key,
            sort_direction=sort_direction,
            display=DisplayOptions(
                show_permissions=bool(show_permissions),
                show_modified=bool(show_modified),
            ),
        )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_DEPTH",
    "DEFAULT_ORDER",
    "DEFAULT_SORT",
    "DisplayOptions",
    "SessionConfig",
    "load_config",
    "load_defaults",
]
