"""Assignment editor: the mutation path for exams, teachers and settings."""

from __future__ import annotations

import logging
from datetime import date as _date
from datetime import datetime
from typing import Any, Optional

from proctor_scheduler.config import RulesConfig
from proctor_scheduler.domain.entities import Exam, Teacher, coerce_count, resize_slots
from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.errors import RecordNotFoundError, SlotConflictError, ValidationError

from .constraints import conflicts_for_exam, find_slot_conflicts

logger = logging.getLogger(__name__)

_DRAFT_FIELDS = ("date", "time", "subject", "grade")


def _check_date(value: str) -> str:
    try:
        parsed = _date.fromisoformat(value)
    except (TypeError, ValueError):
        parsed = None
    # stored dates are compared as strings, so only the canonical form is accepted
    if parsed is None or parsed.isoformat() != value:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return value


def _check_time(value: str) -> str:
    try:
        parsed = datetime.strptime(value, "%H:%M")
    except (TypeError, ValueError):
        parsed = None
    if parsed is None or parsed.strftime("%H:%M") != value:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")
    return value


class AssignmentEditor:
    """
    Creates, updates and deletes exams and teachers on an EntityStore.

    Every rejected save raises before touching the store, so the store
    always holds its last valid state.
    """

    def __init__(self, store: EntityStore, rules: Optional[RulesConfig] = None):
        self.store = store
        self.rules = rules or RulesConfig()

    # -- draft handling ---------------------------------------------------

    def new_exam(self) -> Exam:
        """Discard any staged edit and start a blank draft."""
        self.store.clear_draft()
        return self.store.draft

    def edit_exam(self, exam_id: int) -> Exam:
        """Stage a copy of a committed exam for editing."""
        exam = self.store.get_exam(exam_id)
        if exam is None:
            raise RecordNotFoundError(f"Exam {exam_id} not found")
        self.store.draft = exam.copy()
        self.store.editing_id = exam_id
        return self.store.draft

    def update_draft(self, **fields: Any) -> Exam:
        """Set descriptive fields (date, time, subject, grade, student_count) on the draft."""
        draft = self.store.draft
        for name, value in fields.items():
            if name == "student_count":
                draft.student_count = coerce_count(value)
            elif name in _DRAFT_FIELDS:
                setattr(draft, name, "" if value is None else str(value))
            else:
                raise TypeError(f"Unknown exam field: {name}")
        return draft

    def set_role_count(self, role: str, count: Any) -> Exam:
        """Resize one role array of the draft without moving existing names."""
        draft = self.store.draft
        resized = resize_slots(draft.role_array(role), count)
        draft.role_array(role)[:] = resized
        return draft

    def assign_seat(self, role: str, index: int, name: str) -> Exam:
        seats = self.store.draft.role_array(role)
        if not 0 <= index < len(seats):
            raise IndexError(f"{role} seat {index} out of range (0..{len(seats) - 1})")
        seats[index] = name or ""
        return self.store.draft

    def save_draft(self) -> Exam:
        """Commit the draft as a new exam, or over the exam being edited."""
        store = self.store
        if store.editing_id is not None:
            saved = self.update_exam(store.editing_id, store.draft)
        else:
            saved = self.create_exam(store.draft)
        store.clear_draft()
        return saved

    # -- exams --------------------------------------------------------------

    def _validate_exam(self, exam: Exam, exclude_id: Optional[int]) -> None:
        if not exam.date or not exam.time:
            raise ValidationError("Exam date and time are required")
        _check_date(exam.date)
        _check_time(exam.time)
        settings = self.store.settings
        if self.rules.enforce_allowed_slots:
            if exam.date not in settings.allowed_dates:
                raise ValidationError(f"Date {exam.date} is not an allowed exam date")
            if exam.time not in settings.allowed_times:
                raise ValidationError(f"Time {exam.time} is not an allowed exam time")
        if self.rules.enforce_slot_conflicts:
            conflicts = conflicts_for_exam(exam, self.store.exams, exclude_id=exclude_id)
            if conflicts:
                raise SlotConflictError(conflicts)

    def create_exam(self, exam: Exam) -> Exam:
        """Store a new exam under a fresh id. Returns the stored record."""
        self._validate_exam(exam, exclude_id=None)
        created = exam.copy(id=self.store.next_id())
        self.store.exams.append(created)
        logger.info("Exam %s created: %s %s %s", created.id, created.date, created.time, created.subject)
        self.store.commit()
        return created

    def update_exam(self, exam_id: int, exam: Exam) -> Exam:
        """Replace the exam with ``exam_id``; the id itself never changes."""
        exams = self.store.exams
        for index, current in enumerate(exams):
            if current.id == exam_id:
                break
        else:
            raise RecordNotFoundError(f"Exam {exam_id} not found")
        self._validate_exam(exam, exclude_id=exam_id)
        updated = exam.copy(id=exam_id)
        exams[index] = updated
        logger.info("Exam %s updated", exam_id)
        self.store.commit()
        return updated

    def delete_exam(self, exam_id: int) -> bool:
        """Remove an exam. Returns False if it did not exist."""
        store = self.store
        before = len(store.exams)
        store.exams = [exam for exam in store.exams if exam.id != exam_id]
        if len(store.exams) == before:
            return False
        if store.editing_id == exam_id:
            store.clear_draft()
        logger.info("Exam %s deleted", exam_id)
        store.commit()
        return True

    # -- teachers -----------------------------------------------------------

    def add_teacher(self, name: str, branch: str = "") -> Teacher:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Teacher name is required")
        teacher = Teacher(id=self.store.next_id(), name=name, branch=(branch or "").strip())
        self.store.teachers.append(teacher)
        self.store.commit()
        return teacher

    def update_teacher(self, teacher_id: int, name: str, branch: str = "") -> Teacher:
        """
        Update a teacher, rewriting the old name to the new one in every
        exam's role arrays in the same step.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Teacher name is required")
        store = self.store
        current = store.get_teacher(teacher_id)
        if current is None:
            raise RecordNotFoundError(f"Teacher {teacher_id} not found")

        old_name = current.name
        exams = store.exams
        if old_name != name:
            exams = [
                exam.copy(
                    examiners=[name if n == old_name else n for n in exam.examiners],
                    proctors=[name if n == old_name else n for n in exam.proctors],
                )
                for exam in store.exams
            ]
            if self.rules.enforce_slot_conflicts:
                conflicts = [c for c in find_slot_conflicts(exams) if c.teacher_name == name]
                if conflicts:
                    raise SlotConflictError(conflicts)
        updated = Teacher(id=teacher_id, name=name, branch=(branch or "").strip())

        store.exams = exams
        store.teachers = [updated if t.id == teacher_id else t for t in store.teachers]
        if old_name != name:
            logger.info("Teacher %s renamed: %r -> %r", teacher_id, old_name, name)
        store.commit()
        return updated

    def delete_teacher(self, teacher_id: int) -> bool:
        """Remove a teacher. Existing exam seats keep the name."""
        before = len(self.store.teachers)
        self.store.teachers = [t for t in self.store.teachers if t.id != teacher_id]
        if len(self.store.teachers) == before:
            return False
        self.store.commit()
        return True

    # -- settings -----------------------------------------------------------

    def update_settings(
        self,
        school_name: Optional[str] = None,
        exam_period: Optional[str] = None,
        principal_name: Optional[str] = None,
    ) -> None:
        settings = self.store.settings
        if school_name is not None:
            settings.school_name = school_name
        if exam_period is not None:
            settings.exam_period = exam_period
        if principal_name is not None:
            settings.principal_name = principal_name
        self.store.commit()

    def add_allowed_date(self, value: str) -> bool:
        value = _check_date(value)
        dates = self.store.settings.allowed_dates
        if value in dates:
            return False
        dates.append(value)
        dates.sort()
        self.store.commit()
        return True

    def remove_allowed_date(self, value: str) -> bool:
        dates = self.store.settings.allowed_dates
        if value not in dates:
            return False
        dates.remove(value)
        self.store.commit()
        return True

    def add_allowed_time(self, value: str) -> bool:
        value = _check_time(value)
        times = self.store.settings.allowed_times
        if value in times:
            return False
        times.append(value)
        times.sort()
        self.store.commit()
        return True

    def remove_allowed_time(self, value: str) -> bool:
        times = self.store.settings.allowed_times
        if value not in times:
            return False
        times.remove(value)
        self.store.commit()
        return True

    def reset(self) -> None:
        """Delete every exam and teacher. Settings are kept."""
        self.store.exams = []
        self.store.teachers = []
        self.store.clear_draft()
        logger.warning("All exams and teachers deleted")
        self.store.commit()
