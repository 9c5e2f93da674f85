from __future__ import annotations

import re

import soupsieve

_CSS_SAFE_IDENTIFIER_PATTERN = re.compile(r"^-?[A-Za-z_][A-Za-z0-9_-]*$")
_LINE_BREAKS = {"\n": "\\a ", "\r": "\\d ", "\f": "\\c "}


def is_css_safe_identifier(value: str) -> bool:
    return bool(_CSS_SAFE_IDENTIFIER_PATTERN.fullmatch(value))


def escape_identifier(value: str) -> str:
    if is_css_safe_identifier(value):
        return value
    return soupsieve.escape(value)


def escape_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    for char, replacement in _LINE_BREAKS.items():
        escaped = escaped.replace(char, replacement)
    return escaped


def id_selector(value: str) -> str:
    return f"#{escape_identifier(value)}"


def class_selector(value: str) -> str:
    return f".{escape_identifier(value)}"


def attribute_selector(name: str, value: str) -> str:
    return f'[{escape_identifier(name)}="{escape_string(value)}"]'
