"""In-memory records for teachers, exams and global settings.

Field names follow Python conventions; ``to_dict``/``from_dict`` translate to
the camelCase keys used by snapshot files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Set

PROCTOR = "proctor"
EXAMINER = "examiner"
ROLES = (EXAMINER, PROCTOR)

GRADES = ("9. Sınıf", "10. Sınıf", "11. Sınıf", "12. Sınıf")


def coerce_count(value: Any) -> int:
    """Convert user input to a non-negative integer, treating junk as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    if isinstance(value, str):
        text = value.strip()
        try:
            return max(0, int(text))
        except ValueError:
            pass
        try:
            return max(0, int(float(text)))
        except ValueError:
            return 0
    return 0


def resize_slots(names: Iterable[str], count: Any) -> List[str]:
    """
    Resize a role array to ``count`` seats.

    Names keep their index up to the new length; new seats are empty strings.
    Entries beyond the new length are dropped and not restored by a later grow.
    """
    current = list(names)
    size = coerce_count(count)
    return [current[i] if i < len(current) and current[i] else "" for i in range(size)]


def _name_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return ["" if name is None else str(name) for name in value]


def _optional_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class Teacher:
    id: int
    name: str
    branch: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "branch": self.branch}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Teacher":
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            branch=str(data.get("branch") or ""),
        )


@dataclass
class Exam:
    """A scheduled exam session with its examiner and proctor seats."""

    id: Optional[int] = None
    date: str = ""
    time: str = ""
    subject: str = ""
    grade: str = GRADES[0]
    student_count: int = 0
    examiners: List[str] = field(default_factory=list)
    proctors: List[str] = field(default_factory=list)

    @property
    def examiner_count(self) -> int:
        return len(self.examiners)

    @property
    def proctor_count(self) -> int:
        return len(self.proctors)

    def role_array(self, role: str) -> List[str]:
        if role == EXAMINER:
            return self.examiners
        if role == PROCTOR:
            return self.proctors
        raise ValueError(f"Unknown role: {role!r}")

    def assigned_names(self) -> Set[str]:
        """Non-empty names across both role arrays."""
        return {name for name in self.examiners + self.proctors if name}

    def has_slot(self) -> bool:
        return bool(self.date) and bool(self.time)

    def in_slot(self, date: str, time: str) -> bool:
        return self.date == date and self.time == time

    def copy(self, **changes: Any) -> "Exam":
        clone = replace(self, examiners=list(self.examiners), proctors=list(self.proctors))
        return replace(clone, **changes) if changes else clone

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "time": self.time,
            "subject": self.subject,
            "grade": self.grade,
            "studentCount": self.student_count,
            "examinerCount": self.examiner_count,
            "proctorCount": self.proctor_count,
            "examiners": list(self.examiners),
            "proctors": list(self.proctors),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Exam":
        examiners = _name_list(data.get("examiners"))
        proctors = _name_list(data.get("proctors"))
        # Stored counts win over array length when both are present
        if "examinerCount" in data:
            examiners = resize_slots(examiners, data["examinerCount"])
        if "proctorCount" in data:
            proctors = resize_slots(proctors, data["proctorCount"])
        return cls(
            id=_optional_id(data.get("id")),
            date=str(data.get("date") or ""),
            time=str(data.get("time") or ""),
            subject=str(data.get("subject") or ""),
            grade=str(data.get("grade") or GRADES[0]),
            student_count=coerce_count(data.get("studentCount")),
            examiners=examiners,
            proctors=proctors,
        )


@dataclass
class Settings:
    school_name: str = ""
    exam_period: str = ""
    principal_name: str = ""
    allowed_dates: List[str] = field(default_factory=list)
    allowed_times: List[str] = field(default_factory=list)

    def copy(self) -> "Settings":
        return replace(
            self,
            allowed_dates=list(self.allowed_dates),
            allowed_times=list(self.allowed_times),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schoolName": self.school_name,
            "examPeriod": self.exam_period,
            "principalName": self.principal_name,
            "allowedDates": list(self.allowed_dates),
            "allowedTimes": list(self.allowed_times),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["Settings"] = None) -> "Settings":
        """Build settings from snapshot keys, keeping ``base`` values for missing keys."""
        merged = base.copy() if base is not None else cls()
        if "schoolName" in data:
            merged.school_name = str(data["schoolName"] or "")
        if "examPeriod" in data:
            merged.exam_period = str(data["examPeriod"] or "")
        if "principalName" in data:
            merged.principal_name = str(data["principalName"] or "")
        if "allowedDates" in data:
            merged.allowed_dates = sorted({str(d) for d in data["allowedDates"] or []})
        if "allowedTimes" in data:
            merged.allowed_times = sorted({str(t) for t in data["allowedTimes"] or []})
        return merged
