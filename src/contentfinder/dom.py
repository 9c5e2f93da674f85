from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    CData,
    NavigableString,
    RubyParenthesisString,
    RubyTextString,
    Script,
    Stylesheet,
    TemplateString,
)

# every string a DOM textContent covers; comments, doctypes and declarations are left out
TEXT_TYPES = (
    NavigableString,
    CData,
    Script,
    Stylesheet,
    TemplateString,
    RubyTextString,
    RubyParenthesisString,
)


def is_element(node: Any) -> bool:
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def document_of(node: Tag) -> BeautifulSoup | None:
    if isinstance(node, BeautifulSoup):
        return node
    for parent in node.parents:
        if isinstance(parent, BeautifulSoup):
            return parent
    return None


def parent_element(node: Tag) -> Tag | None:
    parent = node.parent
    if parent is None or not is_element(parent):
        return None
    return parent


def element_children(node: Tag) -> list[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]


def element_index(node: Tag) -> int | None:
    """1-based position of ``node`` among its parent's element children."""
    parent = node.parent
    if parent is None:
        return None
    for position, child in enumerate(element_children(parent), start=1):
        if child is node:
            return position
    return None


def text_content(node: Tag) -> str:
    return node.get_text(types=TEXT_TYPES)


def contains(ancestor: Tag, node: Tag) -> bool:
    if ancestor is node:
        return True
    return any(parent is ancestor for parent in node.parents)


def attribute_value(raw: Any) -> str:
    # bs4 splits multi-valued attributes (class, rel, ...) into lists
    if isinstance(raw, (list, tuple)):
        return " ".join(str(item) for item in raw)
    return str(raw)


def class_tokens(node: Tag) -> list[str]:
    raw = node.get("class")
    if not raw:
        return []
    items = raw.split() if isinstance(raw, str) else [item for item in raw if isinstance(item, str)]

    seen: set[str] = set()
    tokens: list[str] = []
    for item in items:
        clean = item.strip()
        if not clean or clean in seen:
            continue
        seen.add(clean)
        tokens.append(clean)
    return tokens
