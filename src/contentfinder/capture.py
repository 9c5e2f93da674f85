from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup, Tag

from .dom import element_children
from .errors import InvalidInputError
from .finder import OptionsInput, compute_selector
from .models import Fragment

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

_SNAPSHOT_SCRIPT = """
(el) => {
  const path = [];
  let current = el;
  while (current.parentElement) {
    const siblings = Array.from(current.parentElement.children);
    path.unshift(siblings.indexOf(current));
    current = current.parentElement;
  }
  return {
    html: current.outerHTML || '',
    tag: (current.tagName || '').toLowerCase(),
    path,
  };
}
"""


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def follow_index_path(document: BeautifulSoup, path: list[int]) -> Tag:
    node = document.find(True)
    if not isinstance(node, Tag):
        raise InvalidInputError("Captured snapshot contains no elements.")

    for depth, position in enumerate(path):
        children = element_children(node)
        if not 0 <= position < len(children):
            raise InvalidInputError(
                f"Captured snapshot does not match the live element at depth {depth} (index {position})."
            )
        node = children[position]
    return node


def snapshot_element(element: ElementHandle) -> Tag:
    """Serialize the element's document and return the element's counterpart in the parsed copy."""
    payload: dict[str, Any] = element.evaluate(_SNAPSHOT_SCRIPT)
    html = str(payload.get("html", "") or "")
    if not html:
        raise InvalidInputError("Element is not attached to a document.")

    document = parse_html(html)
    root = document.find(True)
    tag = str(payload.get("tag", "") or "")
    if tag and (not isinstance(root, Tag) or root.name != tag):
        raise InvalidInputError(f"Captured snapshot does not start with <{tag}>.")
    return follow_index_path(document, [int(item) for item in payload.get("path", [])])


def snapshot_page(page: Page) -> BeautifulSoup:
    return parse_html(page.content())


def compute_selector_for_element(element: ElementHandle, options: OptionsInput = None) -> list[Fragment]:
    return compute_selector(snapshot_element(element), options)
