from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

Richness = Literal["all", "single_nth", "nth_only"]

RICHNESS_LADDER: tuple[Richness, ...] = ("all", "single_nth", "nth_only")


@dataclass(frozen=True, slots=True)
class Candidate:
    name: str
    content: str | None
    penalty: float
    level: int = 0
    content_unique: bool = False

    def at_level(self, level: int) -> Candidate:
        return replace(self, level=level)

    def marked(self) -> Candidate:
        return replace(self, content_unique=True)

    def unmarked(self) -> Candidate:
        if not self.content_unique:
            return self
        return replace(self, content_unique=False)


Path = tuple[Candidate, ...]


@dataclass(frozen=True, slots=True)
class Fragment:
    name: str
    content: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {"name": self.name, "content": self.content}
