"""Runtime layer: session config, navigation, display view, and the terminal loop.

``run_explorer`` is imported lazily so importing the navigation controller
does not pull in terminal modules.
"""

from __future__ import annotations


def run_explorer(*args, **kwargs):
    """Lazily import the interactive entrypoint."""
    from .app import run_explorer as _run_explorer

    return _run_explorer(*args, **kwargs)


__all__ = [
    "run_explorer",
]
