"""Exception types raised by the scheduling core."""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for all scheduler errors."""


class ValidationError(SchedulerError, ValueError):
    """A record is missing a required field or breaks an assignment rule."""


class SlotConflictError(ValidationError):
    """A teacher would hold two roles in the same (date, time) slot."""

    def __init__(self, conflicts):
        self.conflicts = list(conflicts)
        details = "; ".join(
            f"{c.teacher_name} already assigned at {c.date} {c.time} (exam {c.other_exam_id})"
            for c in self.conflicts
        )
        super().__init__(f"Slot conflict: {details}")


class FormatError(SchedulerError, ValueError):
    """An imported snapshot is unparseable or has the wrong shape."""


class PersistenceError(SchedulerError):
    """The snapshot storage could not be read or written."""


class RecordNotFoundError(SchedulerError, LookupError):
    """No record with the requested id exists."""
