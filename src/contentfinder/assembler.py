from __future__ import annotations

import logging
from itertools import product
from math import prod
from typing import Sequence

from .candidates import candidate_level
from .dom import parent_element
from .models import Candidate, Path, Richness
from .options import SearchContext
from .oracle import build_query, check, penalty, resolves_to

logger = logging.getLogger("contentfinder.search")


class ThresholdExceeded(Exception):
    def __init__(self, combinations: int, threshold: int) -> None:
        super().__init__(f"{combinations} combinations exceed threshold {threshold}")
        self.combinations = combinations
        self.threshold = threshold


def count_combinations(stack: Sequence[Sequence[Candidate]]) -> int:
    return prod(len(level) for level in stack)


def sorted_combinations(stack: Sequence[Sequence[Candidate]]) -> list[Path]:
    # product() varies the last (farthest) level fastest; sorted() is stable
    return sorted(product(*stack), key=penalty)


def find_unique_path(stack: Sequence[Sequence[Candidate]], ctx: SearchContext) -> Path | None:
    combinations = count_combinations(stack)
    if combinations > ctx.options.threshold:
        raise ThresholdExceeded(combinations, ctx.options.threshold)

    for candidate in sorted_combinations(stack):
        verified = check(candidate, ctx)
        if verified is not None and resolves_to(verified, ctx):
            return verified
    return None


def bottom_up_search(ctx: SearchContext, richness: Richness) -> Path | None:
    stack: list[list[Candidate]] = []
    current = ctx.target
    depth = 0

    try:
        while current is not None and current is not ctx.boundary:
            stack.append(candidate_level(current, depth, richness, ctx.options))

            if len(stack) >= ctx.options.seed_min_length:
                path = find_unique_path(stack, ctx)
                if path is not None:
                    logger.debug("Found %r at depth %d (richness=%s)", build_query(path), depth, richness)
                    return path

            current = parent_element(current)
            depth += 1

        return find_unique_path(stack, ctx) if stack else None
    except ThresholdExceeded as exc:
        logger.debug("Resolution skipped at depth %d (richness=%s): %s", depth, richness, exc)
        return None
