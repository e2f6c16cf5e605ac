"""Test configuration."""
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from faker import Faker
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vocabdrill.models.base import init_db
from vocabdrill.models.word_models import Word, WordStats
from vocabdrill.services.word_service import WordRegistry

fake = Faker()


@pytest.fixture
def session_factory():
    """Create a session factory bound to a private in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def registry() -> WordRegistry:
    """Create a registry holding three fresh words."""
    registry = WordRegistry()
    for _ in range(3):
        registry.add_word(fake.unique.word(), fake.unique.word())
    return registry


def make_word(
    correct_s2t: int = 0,
    total_s2t: int = 0,
    correct_t2s: int = 0,
    total_t2s: int = 0,
    consecutive: int = 0,
    **kwargs,
) -> Word:
    """Build a word with the given counters."""
    return Word(
        source_text=kwargs.pop("source_text", fake.unique.word()),
        target_text=kwargs.pop("target_text", fake.unique.word()),
        stats=WordStats(
            correct_source_to_target=correct_s2t,
            total_source_to_target=total_s2t,
            correct_target_to_source=correct_t2s,
            total_target_to_source=total_t2s,
        ),
        consecutive_successes=consecutive,
        **kwargs,
    )


@pytest.fixture
def word_factory():
    """Provide the word builder to tests."""
    return make_word
