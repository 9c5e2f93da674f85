"""Unique, content-aware CSS selector paths for elements of a parsed HTML tree."""

from __future__ import annotations

from .errors import ContentFinderError, InternalInvariantError, InvalidInputError, SelectorNotFoundError
from .finder import compute_selector, find_selector_path, fragments_to_dicts
from .models import Fragment
from .options import SelectorOptions

__version__ = "0.1.0"

__all__ = [
    "ContentFinderError",
    "Fragment",
    "InternalInvariantError",
    "InvalidInputError",
    "SelectorNotFoundError",
    "SelectorOptions",
    "compute_selector",
    "find_selector_path",
    "fragments_to_dicts",
]
