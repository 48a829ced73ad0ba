"""Workload statistics and read-only exam projections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from proctor_scheduler.domain.entities import Exam, Teacher
from proctor_scheduler.domain.store import EntityStore


@dataclass(frozen=True)
class TeacherStats:
    teacher: Teacher
    examiner_count: int
    proctor_count: int

    @property
    def total(self) -> int:
        return self.examiner_count + self.proctor_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.teacher.name,
            "branch": self.teacher.branch,
            "examinerCount": self.examiner_count,
            "proctorCount": self.proctor_count,
            "total": self.total,
        }


def _seats(value: Any) -> List[str]:
    return value if isinstance(value, list) else []


def teacher_stats(store: EntityStore) -> List[TeacherStats]:
    """
    Count, per teacher, the exams they examine and the exams they proctor.

    A name listed twice in one exam's array still counts once for that exam.
    Results are sorted by total, highest first; equal totals keep the
    teacher collection order.
    """
    stats = []
    for teacher in store.teachers:
        examiner = sum(1 for exam in store.exams if teacher.name in _seats(exam.examiners))
        proctor = sum(1 for exam in store.exams if teacher.name in _seats(exam.proctors))
        stats.append(TeacherStats(teacher, examiner, proctor))
    return sorted(stats, key=lambda s: s.total, reverse=True)


def sorted_program(store: EntityStore) -> List[Exam]:
    """All exams ordered by date, then time."""
    return sorted(store.exams, key=lambda e: (e.date or "", e.time or ""))


def duties_for_teacher(store: EntityStore, teacher: Teacher) -> List[Exam]:
    """Exams where the teacher holds any seat, ordered by (date, time)."""
    return [
        exam for exam in sorted_program(store)
        if teacher.name in _seats(exam.proctors) or teacher.name in _seats(exam.examiners)
    ]


def teachers_with_duties(store: EntityStore) -> List[TeacherStats]:
    """Stats rows for teachers who need a task notice (at least one duty)."""
    return [row for row in teacher_stats(store) if row.total > 0]
