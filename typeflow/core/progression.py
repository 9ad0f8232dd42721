"""XP curve, level-ups and rank lookup."""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from typeflow.core.ranks import RANKS, RankEntry

logger = logging.getLogger(__name__)

BASE_LEVEL_XP = 100
LEVEL_XP_GROWTH = 1.2

SESSION_BASE_XP = 20
WPM_BONUS_STEP = 5
ACCURACY_BONUS_STEP = 3


def xp_for_level(level: int) -> int:
    """XP needed to advance *from* ``level`` to the next one."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return math.floor(BASE_LEVEL_XP * LEVEL_XP_GROWTH ** (level - 1))


def total_xp_for_level(level: int) -> int:
    """Cumulative XP a fresh player needs to reach ``level``."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return sum(xp_for_level(i) for i in range(1, level))


def add_xp(xp: int, level: int, amount: int) -> Tuple[int, int]:
    """Add ``amount`` to the running XP and roll over into as many levels as it covers.

    Returns the new ``(xp, level)``; the returned xp is always below
    ``xp_for_level(level)``.
    """
    if amount < 0:
        raise ValueError(f"XP amount must be non-negative, got {amount}")
    new_xp = xp + amount
    new_level = level
    while new_xp >= xp_for_level(new_level):
        new_xp -= xp_for_level(new_level)
        new_level += 1
    if new_level > level:
        logger.info("Level up: %d -> %d", level, new_level)
    return new_xp, new_level


def rank_for(level: int, ranks: Tuple[RankEntry, ...] = RANKS) -> RankEntry:
    """Highest rank whose ``min_level`` the player has reached."""
    current = ranks[0]
    for rank in ranks:
        if level >= rank.min_level:
            current = rank
    return current


def next_rank_for(level: int, ranks: Tuple[RankEntry, ...] = RANKS) -> Optional[RankEntry]:
    """First rank still ahead of ``level``, or None once the top tier is reached."""
    for rank in ranks:
        if level < rank.min_level:
            return rank
    return None


def session_xp_reward(wpm: int, accuracy: int) -> int:
    """XP for finishing a session: a flat base plus speed and accuracy bonuses."""
    return SESSION_BASE_XP + (wpm // 10) * WPM_BONUS_STEP + (accuracy // 10) * ACCURACY_BONUS_STEP


def level_progress_percent(xp: int, level: int) -> float:
    """How far through the current level the player is (0–100)."""
    return (xp / xp_for_level(level)) * 100.0
