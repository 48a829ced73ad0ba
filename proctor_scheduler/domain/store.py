"""In-memory entity store: the single source of truth for one dataset."""

from __future__ import annotations

import logging
import time as _time
from typing import Any, Callable, Dict, Iterable, List, Optional

from proctor_scheduler.config import ExamDefaults, SettingsDefaults

from .entities import Exam, Settings, Teacher, resize_slots

logger = logging.getLogger(__name__)

Listener = Callable[["EntityStore"], None]


def settings_from_defaults(defaults: SettingsDefaults) -> Settings:
    return Settings(
        school_name=defaults.school_name,
        exam_period=defaults.exam_period,
        principal_name=defaults.principal_name,
        allowed_dates=sorted(set(defaults.allowed_dates)),
        allowed_times=sorted(set(defaults.allowed_times)),
    )


class EntityStore:
    """
    Holds the teacher and exam collections, the global settings and the
    staged exam being composed (the draft).

    Components receive the store explicitly. Mutating components call
    ``commit()`` after changing collections so that listeners (the debounced
    saver) see every settled change.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        teachers: Optional[Iterable[Teacher]] = None,
        exams: Optional[Iterable[Exam]] = None,
        exam_defaults: Optional[ExamDefaults] = None,
    ):
        self.settings: Settings = settings if settings is not None else Settings()
        self.teachers: List[Teacher] = list(teachers or [])
        self.exams: List[Exam] = list(exams or [])
        self.exam_defaults = exam_defaults or ExamDefaults()
        self.draft: Exam = self.new_draft()
        self.editing_id: Optional[int] = None
        self._listeners: List[Listener] = []
        self._last_id = 0

    # -- lookup -----------------------------------------------------------

    def get_exam(self, exam_id: Optional[int]) -> Optional[Exam]:
        for exam in self.exams:
            if exam.id == exam_id:
                return exam
        return None

    def get_teacher(self, teacher_id: Optional[int]) -> Optional[Teacher]:
        for teacher in self.teachers:
            if teacher.id == teacher_id:
                return teacher
        return None

    def find_teacher(self, name: str) -> Optional[Teacher]:
        """First teacher with this display name."""
        for teacher in self.teachers:
            if teacher.name == name:
                return teacher
        return None

    def exams_in_slot(self, date: str, time: str, exclude_id: Optional[int] = None) -> List[Exam]:
        return [
            exam for exam in self.exams
            if exam.in_slot(date, time) and (exclude_id is None or exam.id != exclude_id)
        ]

    # -- ids and drafts ---------------------------------------------------

    def next_id(self) -> int:
        """Millisecond timestamp id, bumped to stay above every id in use."""
        candidate = int(_time.time() * 1000)
        used = [self._last_id]
        used.extend(e.id for e in self.exams if e.id is not None)
        used.extend(t.id for t in self.teachers)
        highest = max(used)
        if candidate <= highest:
            candidate = highest + 1
        self._last_id = candidate
        return candidate

    def new_draft(self) -> Exam:
        defaults = self.exam_defaults
        return Exam(
            grade=defaults.grade,
            examiners=resize_slots([], defaults.examiner_count),
            proctors=resize_slots([], defaults.proctor_count),
        )

    def clear_draft(self) -> None:
        self.draft = self.new_draft()
        self.editing_id = None

    # -- change notification ---------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def commit(self) -> None:
        """Signal that the collections changed."""
        for listener in list(self._listeners):
            listener(self)

    # -- snapshots --------------------------------------------------------

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "exams": [exam.to_dict() for exam in self.exams],
            "teachers": [teacher.to_dict() for teacher in self.teachers],
            "settings": self.settings.to_dict(),
        }

    def replace_all(self, exams: List[Exam], teachers: List[Teacher], settings: Settings) -> None:
        """Swap in all three collections at once and drop any staged edit."""
        self.exams = list(exams)
        self.teachers = list(teachers)
        self.settings = settings
        self.clear_draft()
        logger.info("Store replaced: %d exams, %d teachers", len(self.exams), len(self.teachers))
        self.commit()

    def apply_loaded(self, data: Dict[str, Any]) -> None:
        """
        Apply a snapshot read at startup.

        Settings merge over the current values (missing keys keep defaults);
        exams and teachers are replaced only when present. Listeners are not
        notified, since the data already matches storage.
        """
        settings, exams, teachers = self.settings, self.exams, self.teachers
        if data.get("settings"):
            settings = Settings.from_dict(data["settings"], base=self.settings)
        if data.get("exams") is not None:
            exams = [Exam.from_dict(item) for item in data["exams"]]
        if data.get("teachers") is not None:
            teachers = [Teacher.from_dict(item) for item in data["teachers"]]
        self.settings, self.exams, self.teachers = settings, exams, teachers
        self.clear_draft()
