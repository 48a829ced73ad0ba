"""Eligibility of teachers for a seat in an exam slot."""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from proctor_scheduler.domain.entities import EXAMINER, PROCTOR, ROLES, Exam, Teacher
from proctor_scheduler.domain.store import EntityStore

from .collation import collation_key

logger = logging.getLogger(__name__)


def sorted_teachers(teachers: List[Teacher]) -> List[Teacher]:
    """Teachers ordered by branch (Turkish collation), insertion order on ties."""
    return sorted(teachers, key=lambda t: collation_key(t.branch))


def names_in_draft(draft: Exam, role: str, slot_index: int) -> Set[str]:
    """
    Names already seated in the draft, ignoring the seat being edited.

    Every seat of the other role array counts.
    """
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}")
    taken = set()
    for other_role in (PROCTOR, EXAMINER):
        for index, name in enumerate(draft.role_array(other_role)):
            if other_role == role and index == slot_index:
                continue
            if name:
                taken.add(name)
    return taken


def names_busy_in_slot(
    store: EntityStore,
    date: str,
    time: str,
    exclude_exam_id: Optional[int] = None,
) -> Set[str]:
    """Names holding any role in a committed exam at (date, time)."""
    busy = set()
    for exam in store.exams_in_slot(date, time, exclude_id=exclude_exam_id):
        busy |= exam.assigned_names()
    return busy


def available_teachers(
    store: EntityStore,
    date: str,
    time: str,
    role: str,
    slot_index: int,
    exclude_exam_id: Optional[int] = None,
    draft: Optional[Exam] = None,
) -> List[Teacher]:
    """
    List teachers who may take a seat in an exam at (date, time).

    Args:
        store: Entity store holding committed exams and teachers
        date: Exam date (YYYY-MM-DD); empty means no slot chosen yet
        time: Exam time (HH:MM); empty means no slot chosen yet
        role: EXAMINER or PROCTOR, the role array being edited
        slot_index: Seat index being edited within that array
        exclude_exam_id: Committed exam to ignore, normally the one being
            edited in place. Defaults to ``store.editing_id``.
        draft: Exam being composed. Defaults to ``store.draft``.

    Returns:
        Eligible teachers sorted by branch. With no date or time every
        teacher is returned.
    """
    ordered = sorted_teachers(store.teachers)
    if not date or not time:
        return ordered

    if draft is None:
        draft = store.draft
    if exclude_exam_id is None:
        exclude_exam_id = store.editing_id

    taken = names_in_draft(draft, role, slot_index)
    busy = names_busy_in_slot(store, date, time, exclude_exam_id)

    eligible = [t for t in ordered if t.name not in taken and t.name not in busy]
    logger.debug(
        "Slot %s %s %s[%d]: %d of %d teachers available",
        date, time, role, slot_index, len(eligible), len(ordered),
    )
    return eligible
