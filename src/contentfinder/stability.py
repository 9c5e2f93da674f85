"""Filters that keep generated ids, classes and attributes out of selectors.

Pages built by UI frameworks often carry identifiers that change on every
render (``css-1x2y3z``, ``j_idt42``, UUIDs, long counters). Selectors built
on them cannot re-locate anything later, so these helpers recognise such
values and expose them as ready-made ``SelectorOptions`` filters::

    compute_selector(element, stable_filters())
"""

from __future__ import annotations

import re
from math import log2
from typing import Any

TEST_ATTRIBUTES = (
    "data-testid",
    "data-test",
    "data-qa",
    "data-cy",
    "data-e2e",
)

ROOT_ID_BLOCKLIST = frozenset({"__next", "root", "app", "__nuxt", "gatsby-focus-wrapper"})

_DYNAMIC_VALUE_PATTERNS = (
    re.compile(r"^[0-9]{4,}$"),
    re.compile(r"^[a-f0-9]{8,}$", re.IGNORECASE),
    re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE),
    re.compile(r"\d{4,}"),
    re.compile(r"[_:-]\d{3,}$"),
)

_FRAMEWORK_TOKEN_PATTERN = re.compile(
    r"(^|[-_:])(mui|css|ng|react|vue|ember|svelte|jdt|j_idt|sc)([-_:]|\d|$)",
    re.IGNORECASE,
)

_DYNAMIC_CLASS_PATTERNS = (
    re.compile(r"^css-[a-z0-9_-]{4,}$", re.IGNORECASE),
    re.compile(r"^jss\d+$", re.IGNORECASE),
    re.compile(r"^sc-[a-z0-9]+$", re.IGNORECASE),
    re.compile(r"^[a-f0-9]{8,}$", re.IGNORECASE),
    re.compile(r"^[a-z]+__[a-z]+___[a-z0-9]{5,}$", re.IGNORECASE),
)

_JSF_ID_PATTERN = re.compile(r"(:\d+:|:j_idt\d+|:jdt_\d+)", re.IGNORECASE)


def shannon_entropy(value: str) -> float:
    if not value:
        return 0.0
    frequencies: dict[str, int] = {}
    for char in value:
        frequencies[char] = frequencies.get(char, 0) + 1

    entropy = 0.0
    for count in frequencies.values():
        probability = count / len(value)
        entropy -= probability * log2(probability)
    return entropy


def digit_ratio(value: str) -> float:
    if not value:
        return 0.0
    return sum(1 for char in value if char.isdigit()) / len(value)


def is_dynamic_attribute_value(value: str) -> bool:
    text = value.strip()
    if not text:
        return True
    if digit_ratio(text) > 0.4:
        return True
    if len(text) >= 8 and shannon_entropy(text) >= 4.2:
        return True
    if _FRAMEWORK_TOKEN_PATTERN.search(text):
        return True
    return any(pattern.search(text) for pattern in _DYNAMIC_VALUE_PATTERNS)


def is_dynamic_id(value: str) -> bool:
    text = value.strip()
    if not text or text.lower() in ROOT_ID_BLOCKLIST:
        return True
    # JSF / PrimeFaces
    if ":" in text and _JSF_ID_PATTERN.search(text):
        return True
    return is_dynamic_attribute_value(text)


def is_dynamic_class(token: str) -> bool:
    value = token.strip()
    if not value:
        return True
    if any(pattern.match(value) for pattern in _DYNAMIC_CLASS_PATTERNS):
        return True
    if len(value) > 18 and re.search(r"\d", value):
        return True
    return value.count("-") >= 3 and bool(re.search(r"\d", value))


def stable_id_name(value: str) -> bool:
    return not is_dynamic_id(value)


def stable_class_name(token: str) -> bool:
    return not is_dynamic_class(token)


def testing_attribute(name: str, value: str) -> bool:
    return name.lower() in TEST_ATTRIBUTES and not is_dynamic_attribute_value(value)


def stable_filters() -> dict[str, Any]:
    return {
        "id_name": stable_id_name,
        "class_name": stable_class_name,
        "attr": testing_attribute,
    }
