"""Persistence of the word list as a single named JSON blob."""
import json
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vocabdrill.config import settings
from vocabdrill.models.base import SessionLocal
from vocabdrill.models.models import StoredBlob
from vocabdrill.models.word_models import Word
from vocabdrill.monitoring import error_count, store_operations

logger = logging.getLogger(__name__)


def dump_words(words: Sequence[Word]) -> str:
    """Serialize words to the stored JSON list."""
    return json.dumps([word.to_data() for word in words], ensure_ascii=False)


def parse_words(payload: str) -> List[Word]:
    """Deserialize the stored JSON list."""
    records = json.loads(payload)
    if not isinstance(records, list):
        raise ValueError("Stored word list is not a JSON array")
    return [Word.from_data(record) for record in records]


class WordStore(ABC):
    """Load and save the ordered word list.

    Saving is best effort: implementations log failures and never raise, so a
    broken store cannot interrupt a session.
    """

    @abstractmethod
    def load(self) -> List[Word]:
        """Return the stored words, or an empty list."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    def save(self, words: Sequence[Word]) -> None:
        """Store the words, replacing the previous list."""
        raise NotImplementedError("Subclasses must implement this method")


class MemoryWordStore(WordStore):
    """Keeps the serialized list in memory."""

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload

    def load(self) -> List[Word]:
        if self.payload is None:
            return []
        try:
            return parse_words(self.payload)
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Discarding unreadable word list: {e}")
            error_count.labels(error_type="store_decode").inc()
            return []

    def save(self, words: Sequence[Word]) -> None:
        self.payload = dump_words(words)


class SqlWordStore(WordStore):
    """Stores the word list in the stored_blobs table under a fixed key."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        key: Optional[str] = None,
    ):
        """Initialize the store with a session factory and blob key."""
        self.session_factory = session_factory
        self.key = key or settings.storage.key

    def load(self) -> List[Word]:
        store_operations.labels(operation="load").inc()
        db = self.session_factory()
        try:
            blob = db.get(StoredBlob, self.key)
            if blob is None:
                logger.info(f"No stored word list under {self.key!r}")
                return []
            words = parse_words(blob.payload)
            logger.info(f"Loaded {len(words)} words from {self.key!r}")
            return words
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to load word list: {e}")
            error_count.labels(error_type="store_load").inc()
            return []
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Discarding unreadable word list under {self.key!r}: {e}")
            error_count.labels(error_type="store_decode").inc()
            return []
        finally:
            db.close()

    def save(self, words: Sequence[Word]) -> None:
        store_operations.labels(operation="save").inc()
        payload = dump_words(words)
        db = self.session_factory()
        try:
            blob = db.get(StoredBlob, self.key)
            if blob is None:
                db.add(StoredBlob(key=self.key, payload=payload))
            else:
                blob.payload = payload
            db.commit()
            logger.debug(f"Saved {len(words)} words under {self.key!r}")
        except (SQLAlchemyError, OSError) as e:
            db.rollback()
            logger.error(f"Failed to save word list: {e}")
            error_count.labels(error_type="store_save").inc()
        finally:
            db.close()
