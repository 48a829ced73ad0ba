"""SQLAlchemy models for snapshot persistence."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class SnapshotDocument(Base):
    """One owner's full {exams, teachers, settings} state, stored as JSON text."""
    
    __tablename__ = "snapshots"
    
    owner_key = Column(String(200), primary_key=True)
    payload = Column(Text, nullable=False)  # JSON-encoded snapshot
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    def __repr__(self) -> str:
        return f"<SnapshotDocument(owner='{self.owner_key}', updated_at={self.updated_at}, bytes={len(self.payload or '')})>"
