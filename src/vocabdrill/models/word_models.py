"""Models for vocabulary words and their review statistics."""
from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, Optional

from vocabdrill.config import INITIAL_EASE_FACTOR, INITIAL_INTERVAL


class Direction(Enum):
    """Translation direction tested on a turn."""
    SOURCE_TO_TARGET = "en-fr"  # Show the source text, ask for the target
    TARGET_TO_SOURCE = "fr-en"  # Show the target text, ask for the source


@dataclass
class WordStats:
    """Correct and total answer counters for both directions."""
    correct_source_to_target: int = 0
    total_source_to_target: int = 0
    correct_target_to_source: int = 0
    total_target_to_source: int = 0

    @property
    def total_attempts(self) -> int:
        return self.total_source_to_target + self.total_target_to_source

    @property
    def total_correct(self) -> int:
        return self.correct_source_to_target + self.correct_target_to_source

    def correct_for(self, direction: Direction) -> int:
        if direction is Direction.SOURCE_TO_TARGET:
            return self.correct_source_to_target
        return self.correct_target_to_source

    def total_for(self, direction: Direction) -> int:
        if direction is Direction.SOURCE_TO_TARGET:
            return self.total_source_to_target
        return self.total_target_to_source

    def record(self, direction: Direction, correct: bool) -> None:
        """Count one answer in the given direction."""
        if direction is Direction.SOURCE_TO_TARGET:
            self.total_source_to_target += 1
            if correct:
                self.correct_source_to_target += 1
        else:
            self.total_target_to_source += 1
            if correct:
                self.correct_target_to_source += 1


def _to_millis(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


def _from_millis(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, UTC)


@dataclass(eq=False)
class Word:
    """A vocabulary pair under tracking.

    Words compare by identity: two entries with the same text are still
    different words.
    """
    source_text: str
    target_text: str
    stats: WordStats = field(default_factory=WordStats)
    consecutive_successes: int = 0
    last_reviewed_at: Optional[datetime] = None
    # Reserved for interval scheduling, not read by the selector
    interval: int = INITIAL_INTERVAL
    ease_factor: float = INITIAL_EASE_FACTOR
    repetition_count: int = 0
    next_review_at: Optional[datetime] = None

    def prompt(self, direction: Direction) -> str:
        """Text on the front of the card."""
        if direction is Direction.SOURCE_TO_TARGET:
            return self.source_text
        return self.target_text

    def answer(self, direction: Direction) -> str:
        """Text on the back of the card."""
        if direction is Direction.SOURCE_TO_TARGET:
            return self.target_text
        return self.source_text

    def record_answer(self, direction: Direction, correct: bool, reviewed_at: datetime) -> None:
        """Apply one answer to the counters and the success streak."""
        self.stats.record(direction, correct)
        self.consecutive_successes = self.consecutive_successes + 1 if correct else 0
        self.last_reviewed_at = reviewed_at

    def to_data(self) -> Dict[str, Any]:
        """Convert to a JSON-ready record for storage."""
        return {
            "en": self.source_text,
            "fr": self.target_text,
            "consecutiveSuccess": self.consecutive_successes,
            "stats": {
                "correctEnToFr": self.stats.correct_source_to_target,
                "totalEnToFr": self.stats.total_source_to_target,
                "correctFrToEn": self.stats.correct_target_to_source,
                "totalFrToEn": self.stats.total_target_to_source,
            },
            "interval": self.interval,
            "easeFactor": self.ease_factor,
            "repetitions": self.repetition_count,
            "lastReviewed": _to_millis(self.last_reviewed_at),
            "nextReview": _to_millis(self.next_review_at),
        }

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> 'Word':
        """Create a Word from a stored record."""
        stats = data.get("stats") or {}
        return cls(
            source_text=data["en"],
            target_text=data["fr"],
            stats=WordStats(
                correct_source_to_target=stats.get("correctEnToFr", 0),
                total_source_to_target=stats.get("totalEnToFr", 0),
                correct_target_to_source=stats.get("correctFrToEn", 0),
                total_target_to_source=stats.get("totalFrToEn", 0),
            ),
            consecutive_successes=data.get("consecutiveSuccess") or 0,
            last_reviewed_at=_from_millis(data.get("lastReviewed")),
            interval=data.get("interval", INITIAL_INTERVAL),
            ease_factor=data.get("easeFactor", INITIAL_EASE_FACTOR),
            repetition_count=data.get("repetitions", 0),
            next_review_at=_from_millis(data.get("nextReview")),
        )
