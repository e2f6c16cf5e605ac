"""Weighted selection of the next word and direction."""
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Callable, List, Optional, Sequence

from vocabdrill.config import settings
from vocabdrill.models.word_models import Direction, Word
from vocabdrill.services.progress import is_mastered

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


@dataclass
class Selection:
    """A word to present and the direction to test it in."""
    word: Word
    direction: Direction


class WordSelector:
    """Picks non-mastered words with probability proportional to their weight.

    Weights add up "need" signals (low success rate, never or long ago seen)
    and multiply down words that were just shown or reviewed minutes ago.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the selector with an optional random source and clock."""
        self.rng = rng or random.Random()
        self.clock = clock or utc_now

    def weight(self, word: Word, last_shown: Optional[Word], now: datetime) -> float:
        """Compute the sampling weight of an eligible word."""
        learning = settings.learning
        weight = 1.0

        success_rate = word.stats.total_correct / (word.stats.total_attempts or 1)
        weight += (1 - success_rate) * learning.failure_weight

        if word.last_reviewed_at is None:
            weight += learning.unseen_boost
        else:
            hours_elapsed = (now - word.last_reviewed_at) / timedelta(hours=1)
            if hours_elapsed > learning.stale_after_hours:
                weight += min(hours_elapsed / learning.stale_after_hours, learning.max_stale_boost)

        if word is last_shown:
            weight *= learning.last_shown_penalty

        recent_window = timedelta(minutes=learning.recent_window_minutes)
        if word.last_reviewed_at is not None and now - word.last_reviewed_at < recent_window:
            weight *= learning.recent_penalty

        return weight

    def select_word(self, words: Sequence[Word], last_shown: Optional[Word] = None) -> Optional[Word]:
        """Draw one non-mastered word, or None when every word is mastered."""
        eligible: List[Word] = [word for word in words if not is_mastered(word)]
        if not eligible:
            logger.debug(f"No eligible word among {len(words)} words")
            return None

        now = self.clock()
        weights = [self.weight(word, last_shown, now) for word in eligible]
        total_weight = sum(weights)

        remaining = self.rng.random() * total_weight
        for word, weight in zip(eligible, weights):
            remaining -= weight
            if remaining <= 0:
                return word

        # Floating point drift left a positive remainder
        return eligible[0]

    def choose_direction(self, word: Word) -> Direction:
        """Prefer the weaker direction, with an occasional random pick."""
        stats = word.stats
        ratios = {
            direction: stats.correct_for(direction) / (stats.total_for(direction) or 1)
            for direction in Direction
        }

        if ratios[Direction.SOURCE_TO_TARGET] < ratios[Direction.TARGET_TO_SOURCE]:
            direction = Direction.SOURCE_TO_TARGET
        else:
            direction = Direction.TARGET_TO_SOURCE

        if self.rng.random() < settings.learning.direction_random_probability:
            direction = self.rng.choice([Direction.SOURCE_TO_TARGET, Direction.TARGET_TO_SOURCE])
        return direction

    def select(self, words: Sequence[Word], last_shown: Optional[Word] = None) -> Optional[Selection]:
        """Select the next word and its direction."""
        word = self.select_word(words, last_shown)
        if word is None:
            return None
        return Selection(word=word, direction=self.choose_direction(word))
