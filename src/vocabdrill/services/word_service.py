"""Service for managing the word collection."""
import logging
from typing import Iterator, List, Optional

from vocabdrill.config import settings
from vocabdrill.models.word_models import Word
from vocabdrill.monitoring import words_added

logger = logging.getLogger(__name__)


class WordRegistryError(ValueError):
    """Base class for rejected registry changes."""


class ValidationError(WordRegistryError):
    """A field was empty after trimming."""


class DuplicateWordError(WordRegistryError):
    """A field matches an existing word case-insensitively."""


class WordRegistry:
    """Ordered collection of words with validation and de-duplication."""

    def __init__(self, words: Optional[List[Word]] = None):
        """Initialize the registry, optionally with previously stored words."""
        self.words: List[Word] = list(words) if words else []

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self.words)

    def replace_all(self, words: List[Word]) -> None:
        """Swap in a freshly loaded word list."""
        self.words[:] = words

    def add_word(self, source_text: str, target_text: str) -> Word:
        """Add a new vocabulary pair with fresh statistics."""
        source = source_text.strip()
        target = target_text.strip()
        if not source or not target:
            raise ValidationError("Both fields are required")

        source_key = source.lower()
        target_key = target.lower()
        for word in self.words:
            if word.source_text.lower() == source_key or word.target_text.lower() == target_key:
                raise DuplicateWordError(f"Word already exists: {word.source_text} / {word.target_text}")

        word = Word(
            source_text=source,
            target_text=target,
            interval=settings.learning.initial_interval,
            ease_factor=settings.learning.initial_ease_factor,
        )
        self.words.append(word)
        words_added.inc()
        logger.info(f"Added word {source!r} / {target!r} ({len(self.words)} words)")
        return word
