"""Services for availability, editing, merging and statistics."""

from .availability import available_teachers, sorted_teachers
from .constraints import SlotConflict, conflicts_for_exam, find_slot_conflicts, validate_exam_constraints
from .editor import AssignmentEditor
from .merge import MergeOperator, merged_exam
from .statistics import TeacherStats, duties_for_teacher, sorted_program, teacher_stats, teachers_with_duties

__all__ = [
    "available_teachers",
    "sorted_teachers",
    "SlotConflict",
    "conflicts_for_exam",
    "find_slot_conflicts",
    "validate_exam_constraints",
    "AssignmentEditor",
    "MergeOperator",
    "merged_exam",
    "TeacherStats",
    "duties_for_teacher",
    "sorted_program",
    "teacher_stats",
    "teachers_with_duties",
]
