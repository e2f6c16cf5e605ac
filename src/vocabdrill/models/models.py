"""Database models for the trainer."""
from sqlalchemy import Column, String, Text

from vocabdrill.models.base import Base, TimestampMixin


class StoredBlob(Base, TimestampMixin):
    """A named JSON document, e.g. the serialized word list."""

    __tablename__ = "stored_blobs"

    key = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)
