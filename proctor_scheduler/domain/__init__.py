"""Domain records, the entity store and the data access layer."""

from .entities import EXAMINER, GRADES, PROCTOR, ROLES, Exam, Settings, Teacher, coerce_count, resize_slots
from .models import Base, SnapshotDocument
from .repositories import DatabaseManager, SnapshotRepository
from .store import EntityStore, settings_from_defaults

__all__ = [
    "EXAMINER",
    "PROCTOR",
    "ROLES",
    "GRADES",
    "Exam",
    "Settings",
    "Teacher",
    "coerce_count",
    "resize_slots",
    "Base",
    "SnapshotDocument",
    "DatabaseManager",
    "SnapshotRepository",
    "EntityStore",
    "settings_from_defaults",
]
