"""Tests for word models."""
from datetime import datetime, UTC

import pytest

from vocabdrill.config import INITIAL_EASE_FACTOR, INITIAL_INTERVAL
from vocabdrill.models.word_models import Direction, Word, WordStats


def test_word_creation() -> None:
    """Test word creation defaults."""
    word = Word(source_text="hello", target_text="bonjour")

    assert word.stats.total_attempts == 0
    assert word.stats.total_correct == 0
    assert word.consecutive_successes == 0
    assert word.last_reviewed_at is None
    assert word.interval == INITIAL_INTERVAL
    assert word.ease_factor == INITIAL_EASE_FACTOR
    assert word.repetition_count == 0
    assert word.next_review_at is None


def test_words_compare_by_identity() -> None:
    """Test that equal text does not make two words the same word."""
    first = Word(source_text="hello", target_text="bonjour")
    second = Word(source_text="hello", target_text="bonjour")

    assert first != second
    assert first == first
    assert second not in [first]


def test_stats_record_per_direction() -> None:
    """Test that answers are counted in their own direction."""
    stats = WordStats()
    stats.record(Direction.SOURCE_TO_TARGET, True)
    stats.record(Direction.SOURCE_TO_TARGET, False)
    stats.record(Direction.TARGET_TO_SOURCE, True)

    assert stats.correct_for(Direction.SOURCE_TO_TARGET) == 1
    assert stats.total_for(Direction.SOURCE_TO_TARGET) == 2
    assert stats.correct_for(Direction.TARGET_TO_SOURCE) == 1
    assert stats.total_for(Direction.TARGET_TO_SOURCE) == 1
    assert stats.total_attempts == 3
    assert stats.total_correct == 2


def test_record_answer_updates_streak() -> None:
    """Test that a wrong answer resets the success streak."""
    word = Word(source_text="cat", target_text="chat")
    reviewed_at = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    word.record_answer(Direction.SOURCE_TO_TARGET, True, reviewed_at)
    word.record_answer(Direction.TARGET_TO_SOURCE, True, reviewed_at)
    assert word.consecutive_successes == 2
    assert word.last_reviewed_at == reviewed_at

    word.record_answer(Direction.TARGET_TO_SOURCE, False, reviewed_at)
    assert word.consecutive_successes == 0
    assert word.stats.total_attempts == 3


def test_prompt_and_answer() -> None:
    """Test card faces for both directions."""
    word = Word(source_text="dog", target_text="chien")

    assert word.prompt(Direction.SOURCE_TO_TARGET) == "dog"
    assert word.answer(Direction.SOURCE_TO_TARGET) == "chien"
    assert word.prompt(Direction.TARGET_TO_SOURCE) == "chien"
    assert word.answer(Direction.TARGET_TO_SOURCE) == "dog"


def test_to_data_keeps_absent_timestamps_null() -> None:
    """Test that a never reviewed word stores null timestamps."""
    data = Word(source_text="hello", target_text="bonjour").to_data()

    assert data["lastReviewed"] is None
    assert data["nextReview"] is None
    assert data["stats"] == {
        "correctEnToFr": 0,
        "totalEnToFr": 0,
        "correctFrToEn": 0,
        "totalFrToEn": 0,
    }
    assert data["easeFactor"] == INITIAL_EASE_FACTOR


def test_to_data_and_back() -> None:
    """Test that a reviewed word survives storage."""
    reviewed_at = datetime(2024, 5, 1, 12, 30, 15, tzinfo=UTC)
    word = Word(
        source_text="house",
        target_text="maison",
        stats=WordStats(3, 4, 1, 2),
        consecutive_successes=2,
        last_reviewed_at=reviewed_at,
    )

    data = word.to_data()
    assert data["lastReviewed"] == int(reviewed_at.timestamp() * 1000)

    restored = Word.from_data(data)
    assert restored.source_text == "house"
    assert restored.target_text == "maison"
    assert restored.stats == word.stats
    assert restored.consecutive_successes == 2
    assert restored.last_reviewed_at == reviewed_at
    assert restored.next_review_at is None


def test_from_data_fills_missing_fields() -> None:
    """Test loading a sparse record written by an older version."""
    word = Word.from_data({"en": "tree", "fr": "arbre", "stats": {"totalEnToFr": 2}})

    assert word.stats.total_source_to_target == 2
    assert word.stats.correct_source_to_target == 0
    assert word.consecutive_successes == 0
    assert word.interval == INITIAL_INTERVAL
    assert word.last_reviewed_at is None


if __name__ == "__main__":
    pytest.main([__file__])
