from __future__ import annotations

import logging

from .models import Path
from .options import SearchContext
from .oracle import build_query, check, penalty, resolves_to, unmarked

logger = logging.getLogger("contentfinder.search")


def _is_shortenable(path: Path, ctx: SearchContext) -> bool:
    return len(path) > 2 and len(path) > ctx.options.optimized_min_length


def reductions(path: Path, ctx: SearchContext) -> list[Path]:
    """Every unique, target-preserving path reachable by dropping interior fragments.

    Each successful removal is explored further, depth first, in the order the
    fragments appear. A reduction reached through several removal orders is
    reported once, at its first discovery.
    """
    found: list[Path] = []
    seen: set[tuple[tuple[str, int], ...]] = set()

    def explore(current: Path) -> None:
        if not _is_shortenable(current, ctx):
            return
        for index in range(1, len(current) - 1):
            shorter = unmarked(current[:index] + current[index + 1 :])
            key = tuple((candidate.name, candidate.level) for candidate in shorter)
            if key in seen:
                continue
            seen.add(key)

            verified = check(shorter, ctx)
            if verified is None or not resolves_to(verified, ctx):
                continue
            found.append(verified)
            explore(verified)

    explore(path)
    return found


def optimize(path: Path, ctx: SearchContext) -> Path:
    candidates = reductions(path, ctx)
    if not candidates:
        return path

    candidates.append(path)
    best = sorted(candidates, key=penalty)[0]
    logger.debug(
        "Optimized %r to %r (%d reductions examined)",
        build_query(path),
        build_query(best),
        len(candidates) - 1,
    )
    return best
