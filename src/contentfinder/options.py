from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping

import soupsieve
from bs4 import BeautifulSoup, Tag

from .dom import contains, document_of, is_element, parent_element
from .errors import InvalidInputError

NameFilter = Callable[[str], bool]
AttributeFilter = Callable[[str, str], bool]


def accept_all(_name: str) -> bool:
    return True


def reject_all_attributes(_name: str, _value: str) -> bool:
    return False


@dataclass(frozen=True, slots=True)
class SelectorOptions:
    root: Tag | None = None
    id_name: NameFilter = accept_all
    class_name: NameFilter = accept_all
    tag_name: NameFilter = accept_all
    attr: AttributeFilter = reject_all_attributes
    seed_min_length: int = 1
    optimized_min_length: int = 2
    threshold: int = 1000


DEFAULT_OPTIONS = SelectorOptions()
OPTION_NAMES = frozenset(item.name for item in fields(SelectorOptions))


@dataclass(frozen=True, slots=True)
class OptionsValidation:
    ok: bool
    message: str


def merge_options(options: SelectorOptions | Mapping[str, Any] | None = None) -> SelectorOptions:
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, SelectorOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidInputError(f"Options must be a mapping or SelectorOptions, got {type(options).__name__}.")

    unknown = sorted(str(key) for key in options if key not in OPTION_NAMES)
    if unknown:
        raise InvalidInputError(f"Unknown option(s): {', '.join(unknown)}.")
    return replace(DEFAULT_OPTIONS, **dict(options))


def validate_options(options: SelectorOptions) -> OptionsValidation:
    if options.root is not None and not isinstance(options.root, Tag):
        return OptionsValidation(False, "root must be a bs4 Tag or document.")

    for key in ("id_name", "class_name", "tag_name", "attr"):
        if not callable(getattr(options, key)):
            return OptionsValidation(False, f"{key} must be callable.")

    minimums = (("seed_min_length", 1), ("optimized_min_length", 0), ("threshold", 1))
    for key, minimum in minimums:
        value = getattr(options, key)
        if isinstance(value, bool) or not isinstance(value, int):
            return OptionsValidation(False, f"{key} must be an integer.")
        if value < minimum:
            return OptionsValidation(False, f"{key} must be at least {minimum}.")

    return OptionsValidation(True, "Options are valid.")


@dataclass(frozen=True, slots=True)
class SearchContext:
    """Everything a single search needs; built once per call, never shared."""

    options: SelectorOptions
    target: Tag
    document: BeautifulSoup
    root: Tag
    scope: Tag
    boundary: Tag | None

    def select(self, query: str) -> list[Tag]:
        matches = list(self.scope.select(query))
        if is_element(self.scope) and soupsieve.match(query, self.scope):
            matches.insert(0, self.scope)
        return matches


def default_root(document: BeautifulSoup) -> Tag:
    body = document.find("body")
    if isinstance(body, Tag):
        return body
    return document


def build_context(target: Tag, options: SelectorOptions) -> SearchContext:
    document = document_of(target)
    if document is None:
        raise InvalidInputError("Target element is not attached to a document.")

    fallback_root = default_root(document)
    root = options.root if options.root is not None else fallback_root
    if document_of(root) is not document:
        raise InvalidInputError("root belongs to a different document than the target.")
    if options.root is not None and not contains(root, target):
        raise InvalidInputError("Target element is outside of the configured root.")

    if isinstance(root, BeautifulSoup) or root is fallback_root:
        scope: Tag = document
    else:
        scope = root

    boundary = None if isinstance(root, BeautifulSoup) else parent_element(root)
    return SearchContext(
        options=options,
        target=target,
        document=document,
        root=root,
        scope=scope,
        boundary=boundary,
    )
