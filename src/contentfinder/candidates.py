from __future__ import annotations

from bs4 import Tag

from .dom import attribute_value, class_tokens, element_index, text_content
from .escaping import attribute_selector, class_selector, id_selector
from .models import Candidate, Richness
from .options import SelectorOptions

ID_PENALTY = 0.0
ATTRIBUTE_PENALTY = 0.5
CLASS_PENALTY = 1.0
TAG_PENALTY = 2.0
WILDCARD_PENALTY = 3.0
NTH_CHILD_PENALTY = 1.0


def id_candidate(element: Tag, options: SelectorOptions) -> Candidate | None:
    raw = element.get("id")
    if not raw:
        return None
    value = attribute_value(raw)
    if not value or not options.id_name(value):
        return None
    return Candidate(name=id_selector(value), content=text_content(element), penalty=ID_PENALTY)


def attribute_candidates(element: Tag, options: SelectorOptions) -> list[Candidate]:
    content = text_content(element)
    candidates: list[Candidate] = []
    for name, raw in element.attrs.items():
        value = attribute_value(raw)
        if not options.attr(name, value):
            continue
        candidates.append(
            Candidate(name=attribute_selector(name, value), content=content, penalty=ATTRIBUTE_PENALTY)
        )
    return candidates


def class_candidates(element: Tag, options: SelectorOptions) -> list[Candidate]:
    content = text_content(element)
    return [
        Candidate(name=class_selector(token), content=content, penalty=CLASS_PENALTY)
        for token in class_tokens(element)
        if options.class_name(token)
    ]


def tag_candidate(element: Tag, options: SelectorOptions) -> Candidate | None:
    name = element.name.lower()
    if not options.tag_name(name):
        return None
    return Candidate(name=name, content=text_content(element), penalty=TAG_PENALTY)


def wildcard_candidate() -> Candidate:
    return Candidate(name="*", content=None, penalty=WILDCARD_PENALTY)


def nth_child(candidate: Candidate, index: int) -> Candidate:
    return Candidate(
        name=f"{candidate.name}:nth-child({index})",
        content=candidate.content,
        penalty=candidate.penalty + NTH_CHILD_PENALTY,
        level=candidate.level,
    )


def is_nth_eligible(candidate: Candidate) -> bool:
    return candidate.name != "html" and not candidate.name.startswith("#")


def base_candidates(element: Tag, options: SelectorOptions) -> list[Candidate]:
    """Highest-priority non-empty strategy: id, attributes, classes, tag, wildcard."""
    identifier = id_candidate(element, options)
    if identifier is not None:
        return [identifier]

    attributes = attribute_candidates(element, options)
    if attributes:
        return attributes

    classes = class_candidates(element, options)
    if classes:
        return classes

    tag = tag_candidate(element, options)
    if tag is not None:
        return [tag]

    return [wildcard_candidate()]


def candidate_level(element: Tag, depth: int, richness: Richness, options: SelectorOptions) -> list[Candidate]:
    level = base_candidates(element, options)
    index = element_index(element)

    if richness == "all":
        if index:
            level = level + [nth_child(item, index) for item in level if is_nth_eligible(item)]
    elif richness == "single_nth":
        level = level[:1]
        if index and is_nth_eligible(level[0]):
            level = level + [nth_child(level[0], index)]
    elif richness == "nth_only":
        level = level[:1]
        if index and is_nth_eligible(level[0]):
            level = [nth_child(level[0], index)]
    else:
        raise ValueError(f"Unknown richness level: {richness!r}")

    return [item.at_level(depth) for item in level]
