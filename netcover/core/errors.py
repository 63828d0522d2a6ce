"""Exception types."""

from __future__ import annotations


class NetcoverError(Exception):
    """Base class for every error raised by :mod:`netcover`."""


class ConfigurationError(NetcoverError, ValueError):
    """Initial data or settings are out of bounds; nothing can be rendered."""


class PreconditionError(NetcoverError, ValueError):
    """A caller broke an API contract (bad index, unknown field, zero scale)."""
