from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)


class Difficulty(enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


DEFAULT_DIFFICULTY = Difficulty.BEGINNER


@dataclass(frozen=True)
class TextSet:
    difficulty: Difficulty
    title: str
    texts: List[str]


def _default_texts_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "texts"


class TextRepository:
    """Practice texts grouped by difficulty, loaded from ``data/texts/<difficulty>.yaml``."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir if base_dir is not None else _default_texts_dir()
        self._sets = self._load_sets()

    def all(self) -> List[TextSet]:
        return list(self._sets.values())

    def get(self, difficulty: Union[Difficulty, str]) -> TextSet:
        """Text set for *difficulty*; unknown keys fall back to beginner."""
        return self._sets[self.resolve(difficulty)]

    def resolve(self, difficulty: Union[Difficulty, str]) -> Difficulty:
        if isinstance(difficulty, Difficulty):
            return difficulty
        try:
            return Difficulty(str(difficulty).strip().lower())
        except ValueError:
            logger.warning("Unknown difficulty %r, using %s", difficulty, DEFAULT_DIFFICULTY.value)
            return DEFAULT_DIFFICULTY

    def select_text(self, difficulty: Union[Difficulty, str], rng: Optional[random.Random] = None) -> str:
        """Pick one practice text at random for *difficulty*."""
        chooser = rng if rng is not None else random
        return chooser.choice(self.get(difficulty).texts)

    def _load_sets(self) -> Dict[Difficulty, TextSet]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Texts directory not found: {self._base_dir}")

        sets: Dict[Difficulty, TextSet] = {}
        for difficulty in Difficulty:
            path = self._base_dir / f"{difficulty.value}.yaml"
            if not path.exists():
                raise FileNotFoundError(f"Missing text file for {difficulty.value}: {path}")
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'title' and 'texts'")
            title = raw.get("title")
            content = raw.get("texts")
            if not title or not isinstance(title, str):
                raise ValueError(f"{path.name}: missing or invalid 'title'")
            if content is None:
                raise ValueError(f"{path.name}: missing 'texts'")
            if isinstance(content, list):
                texts = [str(item).strip() for item in content if str(item).strip()]
            else:
                # one text per line
                texts = [line.strip() for line in str(content).splitlines() if line.strip()]
            if not texts:
                raise ValueError(f"{path.name}: 'texts' is empty")
            sets[difficulty] = TextSet(difficulty=difficulty, title=title.strip(), texts=texts)
        logger.debug("Loaded %d text sets from %s", len(sets), self._base_dir)
        return sets
