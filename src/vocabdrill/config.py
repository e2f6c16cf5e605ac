"""Configuration settings for the trainer."""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

# Key of the word list blob in the store
STORAGE_KEY = "flashcard-words"

# Defaults for the inert scheduling fields of a new word
INITIAL_INTERVAL = 1
INITIAL_EASE_FACTOR = 2.5


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///vocabdrill.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class StorageSettings:
    """Word store settings."""
    key: str = os.getenv("STORAGE_KEY", STORAGE_KEY)


@dataclass
class LearningSettings:
    """Mastery thresholds and word selection weights."""
    mastery_threshold: int = int(os.getenv("MASTERY_THRESHOLD", "10"))
    mastery_ratio: float = float(os.getenv("MASTERY_RATIO", "0.85"))
    mastery_streak: int = int(os.getenv("MASTERY_STREAK", "5"))
    error_penalty: float = 0.1  # per wrong answer, in hundreds of percent
    initial_interval: int = INITIAL_INTERVAL
    initial_ease_factor: float = INITIAL_EASE_FACTOR
    failure_weight: float = 2.0
    unseen_boost: float = 2.0
    stale_after_hours: float = 24.0
    max_stale_boost: float = 3.0
    last_shown_penalty: float = 0.1
    recent_penalty: float = 0.3
    recent_window_minutes: float = 5.0
    direction_random_probability: float = float(os.getenv("DIRECTION_RANDOM_PROBABILITY", "0.2"))


@dataclass
class SessionSettings:
    """Timing of the card transitions and notices, in seconds."""
    feedback_delay: float = float(os.getenv("FEEDBACK_DELAY", "1.0"))
    flip_delay: float = float(os.getenv("FLIP_DELAY", "0.3"))
    notice_delay: float = float(os.getenv("NOTICE_DELAY", "3.0"))


def get_metrics_port() -> Optional[int]:
    """Get the metrics port from environment variable."""
    port = os.getenv("METRICS_PORT", "")
    return int(port) if port else None


@dataclass
class MonitoringSettings:
    """Monitoring settings."""
    port: Optional[int] = field(default_factory=get_metrics_port)


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_storage_settings() -> StorageSettings:
    """Get storage settings."""
    return StorageSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_session_settings() -> SessionSettings:
    """Get session settings."""
    return SessionSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    storage: StorageSettings = field(default_factory=get_storage_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    session: SessionSettings = field(default_factory=get_session_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.storage.key:
            raise ValueError("STORAGE_KEY is required")

        if self.learning.mastery_threshold < 1:
            raise ValueError("MASTERY_THRESHOLD must be positive")

        if self.learning.mastery_ratio < 0 or self.learning.mastery_ratio > 1:
            raise ValueError("MASTERY_RATIO must be between 0 and 1")

        if self.learning.mastery_streak < 0:
            raise ValueError("MASTERY_STREAK cannot be negative")

        if self.learning.direction_random_probability < 0 or \
           self.learning.direction_random_probability > 1:
            raise ValueError("DIRECTION_RANDOM_PROBABILITY must be between 0 and 1")

        if self.session.feedback_delay < 0 or self.session.flip_delay < 0 or \
           self.session.notice_delay < 0:
            raise ValueError("FEEDBACK_DELAY, FLIP_DELAY and NOTICE_DELAY cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
