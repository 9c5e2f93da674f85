from __future__ import annotations

from typing import Sequence

import soupsieve
from bs4 import Tag

from .dom import contains, is_element, text_content
from .errors import InternalInvariantError
from .models import Candidate, Path
from .options import SearchContext


def build_query(path: Sequence[Candidate]) -> str:
    """Join a nearest-first path into a CSS query, using ``>`` between adjacent depths."""
    previous = path[0]
    query = previous.name
    for candidate in path[1:]:
        if candidate.level == previous.level + 1:
            query = f"{candidate.name} > {query}"
        else:
            query = f"{candidate.name} {query}"
        previous = candidate
    return query


def penalty(path: Sequence[Candidate]) -> float:
    return sum(candidate.penalty for candidate in path)


def unmarked(path: Sequence[Candidate]) -> Path:
    return tuple(candidate.unmarked() for candidate in path)


def _with_mark(path: Sequence[Candidate], index: int) -> Path:
    marked = list(path)
    marked[index] = marked[index].marked()
    return tuple(marked)


def _contains_text(element: Tag, content: str) -> bool:
    return content in text_content(element)


def check(path: Sequence[Candidate], ctx: SearchContext) -> Path | None:
    """Return ``path`` (with any content mark it needs) when it is unique, else ``None``."""
    query = build_query(path)
    matches = ctx.select(query)
    if not matches:
        raise InternalInvariantError(f"Can't select any node with this selector: {query}")
    if len(matches) == 1:
        return tuple(path)

    nearest = path[0]
    if nearest.content:
        narrowed = [element for element in matches if _contains_text(element, nearest.content)]
        if len(narrowed) == 1:
            return _with_mark(path, 0)

    return _unique_in_ancestor_content(path, ctx)


def _unique_in_ancestor_content(path: Sequence[Candidate], ctx: SearchContext) -> Path | None:
    stack = tuple(path)
    while len(stack) > 1:
        dropped, remainder = stack[0], stack[1:]
        ancestor = remainder[0]

        matches = ctx.select(build_query(remainder))
        if len(matches) > 1 and ancestor.content:
            survivors = [
                element
                for element in matches
                if _contains_text(element, ancestor.content) and len(element.select(dropped.name)) == 1
            ]
            if len(survivors) == 1:
                return _with_mark(path, len(path) - len(remainder))

        stack = remainder
    return None


def _has_anchor(element: Tag, query: str, content: str, include_self: bool, ctx: SearchContext) -> bool:
    if include_self:
        return soupsieve.match(query, element) and _contains_text(element, content)
    for parent in element.parents:
        if not is_element(parent) or not contains(ctx.scope, parent):
            break
        if soupsieve.match(query, parent) and _contains_text(parent, content):
            return True
    return False


def locate(path: Sequence[Candidate], ctx: SearchContext) -> list[Tag]:
    """Elements designated by ``path``, honouring the content of every marked candidate."""
    matches = ctx.select(build_query(path))
    for index, candidate in enumerate(path):
        if not candidate.content_unique or not candidate.content:
            continue
        anchor_query = build_query(path[index:])
        matches = [
            element
            for element in matches
            if _has_anchor(element, anchor_query, candidate.content, index == 0, ctx)
        ]
    return matches


def resolves_to(path: Sequence[Candidate], ctx: SearchContext) -> bool:
    matches = locate(path, ctx)
    return len(matches) == 1 and matches[0] is ctx.target
