"""Repository classes for data access."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, SnapshotDocument


class DatabaseManager:
    """Manages database connection and session factory."""
    
    def __init__(self, db_url: str = "sqlite:///proctor_scheduler.db"):
        """
        Initialize database manager.
        
        Args:
            db_url: SQLAlchemy database URL (default: sqlite:///proctor_scheduler.db)
        """
        self.engine = create_engine(db_url, echo=False)
        self.SessionLocal = sessionmaker(bind=self.engine)
    
    def create_tables(self):
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)
    
    def get_session(self) -> Session:
        """Get a new database session."""
        return self.SessionLocal()


class SnapshotRepository:
    """Repository for snapshot document access."""
    
    @staticmethod
    def get_all(session: Session) -> List[SnapshotDocument]:
        """Get all stored snapshots."""
        return session.query(SnapshotDocument).order_by(SnapshotDocument.owner_key).all()
    
    @staticmethod
    def get_by_owner(session: Session, owner_key: str) -> Optional[SnapshotDocument]:
        """Get the snapshot stored for an owner."""
        return session.query(SnapshotDocument).filter(SnapshotDocument.owner_key == owner_key).first()
    
    @staticmethod
    def upsert(session: Session, owner_key: str, payload: str) -> SnapshotDocument:
        """Create or overwrite the snapshot for an owner."""
        doc = SnapshotRepository.get_by_owner(session, owner_key)
        if doc is None:
            doc = SnapshotDocument(owner_key=owner_key, payload=payload)
            session.add(doc)
        else:
            doc.payload = payload
        doc.updated_at = datetime.utcnow()
        session.commit()
        session.refresh(doc)
        return doc