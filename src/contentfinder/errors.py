from __future__ import annotations


class ContentFinderError(Exception):
    """Base class for every error raised by contentfinder."""


class InvalidInputError(ContentFinderError, ValueError):
    """Raised when the target or the options cannot be searched."""


class SelectorNotFoundError(ContentFinderError, LookupError):
    """Raised when no richness level produced a unique path."""


class InternalInvariantError(ContentFinderError, RuntimeError):
    """Raised when a path built from the target's own ancestors matches nothing."""
