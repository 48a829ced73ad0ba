"""JSON snapshot export and import ({exams, teachers, settings})."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from proctor_scheduler.domain.entities import Exam, Settings, Teacher
from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.errors import FormatError

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = ("exams", "teachers", "settings")


def backup_filename(day: Optional[date] = None) -> str:
    """Default download name for an exported snapshot."""
    day = day or date.today()
    return f"exam_backup_{day.isoformat()}.json"


def export_snapshot(store: EntityStore, indent: int = 2) -> str:
    """Serialize the whole store as JSON text."""
    return json.dumps(store.to_snapshot(), ensure_ascii=False, indent=indent)


def parse_snapshot(text: str) -> Tuple[List[Exam], List[Teacher], Settings]:
    """
    Parse snapshot text into records without touching any store.

    Raises:
        FormatError: If the text is not JSON, a top-level key is missing,
            or a record cannot be read
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise FormatError("Snapshot must be a JSON object")
    missing = [key for key in SNAPSHOT_KEYS if key not in data]
    if missing:
        raise FormatError(f"Snapshot is missing required keys: {', '.join(missing)}")
    if not isinstance(data["exams"], list) or not isinstance(data["teachers"], list):
        raise FormatError("Snapshot 'exams' and 'teachers' must be lists")
    if not isinstance(data["settings"], dict):
        raise FormatError("Snapshot 'settings' must be an object")

    try:
        exams = [Exam.from_dict(item) for item in data["exams"]]
        teachers = [Teacher.from_dict(item) for item in data["teachers"]]
        settings = Settings.from_dict(data["settings"])
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise FormatError(f"Snapshot contains an unreadable record: {e}") from e
    return exams, teachers, settings


def import_snapshot(store: EntityStore, text: str) -> Dict[str, Any]:
    """
    Replace all three collections of the store with an imported snapshot.

    Nothing is applied unless the whole snapshot parses.

    Returns:
        Counts of imported exams and teachers
    """
    exams, teachers, settings = parse_snapshot(text)
    store.replace_all(exams, teachers, settings)
    logger.info("Imported snapshot: %d exams, %d teachers", len(exams), len(teachers))
    return {"exams": len(exams), "teachers": len(teachers)}


def write_snapshot_file(store: EntityStore, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(export_snapshot(store), encoding="utf-8")
    return path


def read_snapshot_file(store: EntityStore, path: str | Path) -> Dict[str, Any]:
    return import_snapshot(store, Path(path).read_text(encoding="utf-8"))
