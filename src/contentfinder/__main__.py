from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

import soupsieve

from .capture import parse_html
from .errors import ContentFinderError, InvalidInputError
from .finder import find_selector_path, fragments_to_dicts, to_fragments
from .oracle import build_query
from .stability import stable_filters


def _build_logger(verbose: bool) -> logging.Logger:
    logger = logging.getLogger("contentfinder")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
    return logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contentfinder",
        description="Compute a unique, content-aware CSS selector path for an element of an HTML file.",
    )
    parser.add_argument("file", type=Path, help="HTML file to load")
    parser.add_argument("selector", help="CSS selector picking the target element")
    parser.add_argument("--index", type=int, default=0, help="which match of SELECTOR to use (default: 0)")
    parser.add_argument("--root", help="CSS selector of the element bounding the ancestor walk")
    parser.add_argument(
        "--attr",
        action="append",
        default=[],
        metavar="NAME",
        help="attribute name allowed in selectors (repeatable)",
    )
    parser.add_argument("--stable", action="store_true", help="skip generated ids, classes and attributes")
    parser.add_argument("--seed-min-length", type=int)
    parser.add_argument("--optimized-min-length", type=int)
    parser.add_argument("--threshold", type=int)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _pick(document: Any, selector: str, index: int, label: str) -> Any:
    matches = document.select(selector)
    if not 0 <= index < len(matches):
        raise InvalidInputError(f"{label} {selector!r} matched {len(matches)} element(s); index {index} is out of range.")
    return matches[index]


def _options_from_args(args: argparse.Namespace, document: Any) -> dict[str, Any]:
    options: dict[str, Any] = stable_filters() if args.stable else {}
    if args.attr:
        allowed = {name.lower() for name in args.attr}
        stable_attr = options.get("attr")

        def attr_filter(name: str, value: str) -> bool:
            if name.lower() in allowed:
                return True
            return bool(stable_attr and stable_attr(name, value))

        options["attr"] = attr_filter
    if args.root:
        options["root"] = _pick(document, args.root, 0, "--root")
    for key in ("seed_min_length", "optimized_min_length", "threshold"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    return options


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _build_logger(args.verbose)

    try:
        document = parse_html(args.file.read_text(encoding="utf-8"))
        target = _pick(document, args.selector, args.index, "Selector")
        path = find_selector_path(target, _options_from_args(args, document))
    except OSError as exc:
        print(f"contentfinder: cannot read {args.file}: {exc}", file=sys.stderr)
        return 2
    except (ContentFinderError, soupsieve.SelectorSyntaxError) as exc:
        print(f"contentfinder: {exc}", file=sys.stderr)
        return 2

    payload = {
        "query": build_query(path),
        "fragments": fragments_to_dicts(to_fragments(path)),
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
