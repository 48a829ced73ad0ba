"""Same-slot conflict detection for exam staffing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from proctor_scheduler.domain.entities import Exam
from proctor_scheduler.errors import SlotConflictError


@dataclass(frozen=True)
class SlotConflict:
    """A teacher seated in two exams that share a (date, time) slot."""

    date: str
    time: str
    teacher_name: str
    exam_id: Optional[int]
    other_exam_id: Optional[int]


def conflicts_for_exam(
    exam: Exam,
    exams: Iterable[Exam],
    exclude_id: Optional[int] = None,
) -> List[SlotConflict]:
    """
    Check a candidate exam against committed exams.

    Args:
        exam: Exam about to be saved
        exams: Committed exams
        exclude_id: Committed exam the candidate replaces (skipped)

    Returns:
        One SlotConflict per (name, other exam) collision, sorted by name
    """
    if not exam.has_slot():
        return []
    names = exam.assigned_names()
    conflicts = []
    for other in exams:
        if other.id == exclude_id or not other.in_slot(exam.date, exam.time):
            continue
        for name in sorted(names & other.assigned_names()):
            conflicts.append(SlotConflict(exam.date, exam.time, name, exam.id, other.id))
    return sorted(conflicts, key=lambda c: (c.teacher_name, str(c.other_exam_id)))


def find_slot_conflicts(exams: Iterable[Exam]) -> List[SlotConflict]:
    """Every pairwise same-slot collision in a collection of exams."""
    by_slot: Dict[Tuple[str, str], List[Exam]] = {}
    for exam in exams:
        by_slot.setdefault((exam.date, exam.time), []).append(exam)

    conflicts = []
    for (date, time), slot_exams in sorted(by_slot.items()):
        for i, first in enumerate(slot_exams):
            for second in slot_exams[i + 1:]:
                for name in sorted(first.assigned_names() & second.assigned_names()):
                    conflicts.append(SlotConflict(date, time, name, first.id, second.id))
    return conflicts


def validate_exam_constraints(exams: Iterable[Exam]) -> None:
    """
    Validate that no teacher holds two roles in the same slot.

    Raises:
        SlotConflictError: If any collision exists
    """
    conflicts = find_slot_conflicts(exams)
    if conflicts:
        raise SlotConflictError(conflicts)
