"""Exception taxonomy shared by configuration, traversal, and navigation.

Configuration and resolution errors stop a session before it starts.
Navigation and traversal errors are recoverable and reported to the caller.
"""

from __future__ import annotations


class SpacemanError(Exception):
    """Base class for every error raised by spaceman itself."""


class ConfigurationError(SpacemanError):
    """Invalid session configuration (path, depth, sort key, direction, extension)."""


class PathResolutionError(SpacemanError):
    """A path could not be canonicalized at session start."""


class NavigationError(SpacemanError):
    """A navigation request could not be honored; location is unchanged."""


class TraversalError(SpacemanError):
    """The root of a scan could not be opened."""


__all__ = [
    "SpacemanError",
    "ConfigurationError",
    "PathResolutionError",
    "NavigationError",
    "TraversalError",
]
