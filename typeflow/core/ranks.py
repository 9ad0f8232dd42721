from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RankEntry:
    """A cosmetic tier unlocked at ``min_level``."""

    min_level: int
    name: str
    color: str
    icon: str


RANKS: Tuple[RankEntry, ...] = (
    RankEntry(min_level=1, name="Novice", color="#6B7280", icon="○"),
    RankEntry(min_level=5, name="Apprentice", color="#10B981", icon="◐"),
    RankEntry(min_level=10, name="Typist", color="#3B82F6", icon="●"),
    RankEntry(min_level=20, name="Swift", color="#8B5CF6", icon="◆"),
    RankEntry(min_level=35, name="Expert", color="#F59E0B", icon="★"),
    RankEntry(min_level=50, name="Master", color="#EF4444", icon="✦"),
    RankEntry(min_level=75, name="Grandmaster", color="#EC4899", icon="❖"),
    RankEntry(min_level=100, name="Legend", color="#FFD700", icon="✧"),
)


def validate_ranks(ranks: Tuple[RankEntry, ...]) -> None:
    """Raise ValueError unless *ranks* is non-empty, ascending and starts at level 1."""
    if not ranks:
        raise ValueError("rank table is empty")
    if ranks[0].min_level != 1:
        raise ValueError(f"first rank must start at level 1, got {ranks[0].min_level}")
    for prev, cur in zip(ranks, ranks[1:]):
        if cur.min_level <= prev.min_level:
            raise ValueError(f"rank {cur.name!r} is not above {prev.name!r}")


validate_ranks(RANKS)
