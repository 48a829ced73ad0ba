"""Merge two exam sessions into one."""

from __future__ import annotations

import logging
from typing import Optional

from proctor_scheduler.config import RulesConfig
from proctor_scheduler.domain.entities import Exam, coerce_count
from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.errors import SlotConflictError

from .constraints import conflicts_for_exam

logger = logging.getLogger(__name__)


def merged_exam(source: Exam, target: Exam) -> Exam:
    """
    Combine ``source`` into ``target``.

    The result keeps the target's id and slot, joins subjects (and grades
    when they differ) with " / ", sums student counts, and takes the
    source's staffing in full. The target's own seats are discarded.
    """
    grade = target.grade if source.grade == target.grade else f"{source.grade} / {target.grade}"
    return Exam(
        id=target.id,
        date=target.date,
        time=target.time,
        subject=f"{source.subject} / {target.subject}",
        grade=grade,
        student_count=coerce_count(source.student_count) + coerce_count(target.student_count),
        examiners=list(source.examiners),
        proctors=list(source.proctors),
    )


class MergeOperator:
    """
    Two-step merge: the first selected exam becomes the source, the second
    the target. Selecting the same exam twice cancels.
    """

    def __init__(self, store: EntityStore, rules: Optional[RulesConfig] = None):
        self.store = store
        self.rules = rules or RulesConfig()
        self.pending_source: Optional[int] = None

    def select(self, exam_id: int) -> Optional[Exam]:
        """
        Select an exam for merging.

        Returns:
            The merged exam when this call completes a merge, otherwise None
        """
        if self.pending_source is None:
            self.pending_source = exam_id
            return None
        source_id = self.pending_source
        if source_id == exam_id:
            self.pending_source = None
            logger.debug("Merge selection of exam %s cancelled", exam_id)
            return None
        return self.merge(source_id, exam_id)

    def cancel(self) -> None:
        self.pending_source = None

    def merge(self, source_id: int, target_id: int) -> Optional[Exam]:
        """
        Merge exam ``source_id`` into ``target_id`` and remove the source.

        Returns:
            The merged exam, or None when the ids are equal or either exam
            no longer exists (nothing is changed in that case)

        Raises:
            SlotConflictError: If the source's staff already hold seats in
                another exam at the target's slot
        """
        self.pending_source = None
        store = self.store
        if source_id == target_id:
            return None
        source = store.get_exam(source_id)
        target = store.get_exam(target_id)
        if source is None or target is None:
            logger.warning("Merge %s -> %s skipped: exam not found", source_id, target_id)
            return None

        result = merged_exam(source, target)
        if self.rules.enforce_slot_conflicts:
            others = [exam for exam in store.exams if exam.id != source_id]
            conflicts = conflicts_for_exam(result, others, exclude_id=target_id)
            if conflicts:
                raise SlotConflictError(conflicts)

        store.exams = [
            result if exam.id == target_id else exam
            for exam in store.exams
            if exam.id != source_id
        ]
        if store.editing_id in (source_id, target_id):
            store.clear_draft()
        logger.info("Exam %s merged into %s", source_id, target_id)
        store.commit()
        return result
