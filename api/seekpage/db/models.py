"""SQLAlchemy models for the SeekPage schema (used by Alembic)."""

from sqlalchemy import BigInteger, Column, DateTime, Identity, Index, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from ..config import get_settings

Base = declarative_base()


class Entry(Base):
    """Entries table model.

    Every listing order has a matching composite index ending in ``id`` so
    seek queries are index range scans.
    """
    __tablename__ = 'entries'

    id = Column(BigInteger, Identity(always=True), primary_key=True)
    category = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    score = Column(Integer, nullable=False, server_default='0')
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('entries_created_desc', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
        Index('entries_score_desc', 'score', 'id', postgresql_ops={'score': 'DESC'}),
        Index('entries_title', 'title', 'id'),
        Index('entries_category_created_desc', 'category', 'created_at', 'id', postgresql_ops={'created_at': 'DESC', 'id': 'DESC'}),
        Index('entries_category_score_desc', 'category', 'score', 'id', postgresql_ops={'score': 'DESC'}),
        Index('entries_category_title', 'category', 'title', 'id'),
    )


def get_database_url() -> str:
    """Get database URL from settings."""
    return get_settings().database_url
