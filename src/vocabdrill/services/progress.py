"""Progress and mastery metrics derived from a word's statistics."""
from dataclasses import dataclass
from typing import Iterable

from vocabdrill.config import settings
from vocabdrill.models.word_models import Word


@dataclass
class ProgressSummary:
    """Counters shown above the card."""
    mastered: int = 0
    learning: int = 0
    average_progress: float = 0.0


def progress_percent(word: Word) -> float:
    """Return the word's progress in [0, 100].

    The success rate is reduced by a fixed number of percentage points per
    wrong answer, so early mistakes weigh heavily on words with few attempts.
    """
    total = word.stats.total_attempts
    if total == 0:
        return 0.0

    correct = word.stats.total_correct
    success_rate = correct / total
    error_penalty = (total - correct) * settings.learning.error_penalty

    progress = success_rate * 100 - error_penalty * 100
    return min(max(progress, 0.0), 100.0)


def is_mastered(word: Word) -> bool:
    """Check volume, accuracy and streak thresholds."""
    total = word.stats.total_attempts
    if total == 0:
        return False

    learning = settings.learning
    return (
        total >= learning.mastery_threshold
        and word.stats.total_correct / total >= learning.mastery_ratio
        and word.consecutive_successes >= learning.mastery_streak
    )


def summarize(words: Iterable[Word]) -> ProgressSummary:
    """Count mastered and learning words and average their progress."""
    summary = ProgressSummary()
    total_progress = 0.0
    for word in words:
        if is_mastered(word):
            summary.mastered += 1
        else:
            summary.learning += 1
        total_progress += progress_percent(word)

    count = summary.mastered + summary.learning
    if count:
        summary.average_progress = total_progress / count
    return summary
