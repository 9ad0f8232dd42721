"""Counter-based daily challenges.

Counters accumulate across every recorded session and are never reset; the
"daily" label is cosmetic.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from typeflow.core.session import SessionResult

WPM_THRESHOLD = 50
ACCURACY_THRESHOLD = 95


class ChallengeType(enum.Enum):
    WPM_THRESHOLD = "wpm_threshold"
    ACCURACY_THRESHOLD = "accuracy_threshold"
    CHARACTERS = "characters"
    PERFECT = "perfect"


@dataclass(frozen=True)
class DailyChallenge:
    id: int
    name: str
    description: str
    type: ChallengeType
    target: int
    xp_reward: int
    threshold: Optional[int] = None


DAILY_CHALLENGES: Tuple[DailyChallenge, ...] = (
    DailyChallenge(
        id=1,
        name="Speed Run",
        description="Complete 3 tests with 50+ WPM",
        type=ChallengeType.WPM_THRESHOLD,
        target=3,
        xp_reward=100,
        threshold=WPM_THRESHOLD,
    ),
    DailyChallenge(
        id=2,
        name="Precision",
        description="Achieve 95%+ accuracy in 2 tests",
        type=ChallengeType.ACCURACY_THRESHOLD,
        target=2,
        xp_reward=80,
        threshold=ACCURACY_THRESHOLD,
    ),
    DailyChallenge(
        id=3,
        name="Endurance",
        description="Type 500 characters total",
        type=ChallengeType.CHARACTERS,
        target=500,
        xp_reward=60,
    ),
    DailyChallenge(
        id=4,
        name="Perfect Ten",
        description="Complete a test with 0 errors",
        type=ChallengeType.PERFECT,
        target=1,
        xp_reward=120,
    ),
)


@dataclass(frozen=True)
class ChallengeCounters:
    tests_with_wpm: int = 0
    tests_with_accuracy: int = 0
    total_chars: int = 0
    perfect_tests: int = 0

    def count_for(self, challenge_type: ChallengeType) -> int:
        if challenge_type is ChallengeType.WPM_THRESHOLD:
            return self.tests_with_wpm
        if challenge_type is ChallengeType.ACCURACY_THRESHOLD:
            return self.tests_with_accuracy
        if challenge_type is ChallengeType.CHARACTERS:
            return self.total_chars
        return self.perfect_tests


@dataclass(frozen=True)
class ChallengeStatus:
    id: int
    current_count: int
    target: int
    complete: bool

    @property
    def progress_percent(self) -> float:
        """Share of the target reached, clamped to 100."""
        return min(self.current_count, self.target) / self.target * 100.0


def record_session(counters: ChallengeCounters, result: SessionResult) -> ChallengeCounters:
    """Fold one finished session into the challenge counters."""
    return replace(
        counters,
        tests_with_wpm=counters.tests_with_wpm + (1 if result.wpm >= WPM_THRESHOLD else 0),
        tests_with_accuracy=counters.tests_with_accuracy + (1 if result.accuracy >= ACCURACY_THRESHOLD else 0),
        total_chars=counters.total_chars + result.text_length,
        perfect_tests=counters.perfect_tests + (1 if result.error_count == 0 else 0),
    )


def challenge_status(challenge: DailyChallenge, counters: ChallengeCounters) -> ChallengeStatus:
    current = counters.count_for(challenge.type)
    return ChallengeStatus(
        id=challenge.id,
        current_count=current,
        target=challenge.target,
        complete=current >= challenge.target,
    )


def challenge_statuses(
    counters: ChallengeCounters,
    challenges: Tuple[DailyChallenge, ...] = DAILY_CHALLENGES,
) -> List[ChallengeStatus]:
    """Status of every challenge, in table order."""
    return [challenge_status(challenge, counters) for challenge in challenges]
