from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .assembler import bottom_up_search
from .dom import is_element
from .errors import InvalidInputError, SelectorNotFoundError
from .models import RICHNESS_LADDER, Candidate, Fragment, Path
from .optimizer import optimize
from .options import SearchContext, SelectorOptions, build_context, merge_options, validate_options
from .oracle import build_query

logger = logging.getLogger("contentfinder.search")

OptionsInput = SelectorOptions | Mapping[str, Any] | None

_ROOT_TAG = "html"


def _require_element(target: Any) -> None:
    if not is_element(target):
        raise InvalidInputError("Can't generate CSS selector for non-element node type.")


def _checked_options(options: OptionsInput) -> SelectorOptions:
    merged = merge_options(options)
    validation = validate_options(merged)
    if not validation.ok:
        raise InvalidInputError(validation.message)
    return merged


def prepare_context(target: Any, options: OptionsInput = None) -> SearchContext:
    _require_element(target)
    return build_context(target, _checked_options(options))


def search(ctx: SearchContext) -> Path:
    """Walk the richness ladder and optimize the first unique path found."""
    for richness in RICHNESS_LADDER:
        path = bottom_up_search(ctx, richness)
        if path is not None:
            optimized = optimize(path, ctx)
            logger.info("Selector %r found at richness %s", build_query(optimized), richness)
            return optimized
        logger.debug("No unique path at richness %s", richness)

    logger.warning("Selector was not found for <%s> after %d richness levels", ctx.target.name, len(RICHNESS_LADDER))
    raise SelectorNotFoundError("Selector was not found.")


def find_selector_path(target: Any, options: OptionsInput = None) -> Path:
    """Nearest-first path for ``target``; the root tag gets a single bare fragment."""
    _require_element(target)
    merged = _checked_options(options)
    if target.name.lower() == _ROOT_TAG:
        return (Candidate(name=_ROOT_TAG, content=None, penalty=0.0),)
    return search(build_context(target, merged))


def to_fragments(path: Iterable[Candidate]) -> list[Fragment]:
    return [
        Fragment(name=candidate.name, content=candidate.content if candidate.content_unique else None)
        for candidate in reversed(tuple(path))
    ]


def compute_selector(target: Any, options: OptionsInput = None) -> list[Fragment]:
    return to_fragments(find_selector_path(target, options))


def fragments_to_dicts(fragments: Iterable[Fragment]) -> list[dict[str, str | None]]:
    return [fragment.as_dict() for fragment in fragments]
