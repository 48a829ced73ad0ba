"""Tests for workload statistics and exam projections."""

from proctor_scheduler.domain.entities import Exam, Teacher
from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.services.statistics import (
    duties_for_teacher,
    sorted_program,
    teacher_stats,
    teachers_with_duties,
)


def _store(teachers, exams):
    return EntityStore(teachers=teachers, exams=exams)


def test_counts_per_role():
    """Ali examines two exams and proctors one."""
    ali = Teacher(id=1, name="Ali", branch="Fizik")
    store = _store([ali], [
        Exam(id=10, date="2025-02-10", time="09:00", examiners=["Ali"], proctors=[""]),
        Exam(id=11, date="2025-02-10", time="11:00", examiners=["Ali", ""], proctors=["Veli"]),
        Exam(id=12, date="2025-02-11", time="09:00", examiners=["Can"], proctors=["Ali"]),
    ])

    [row] = teacher_stats(store)

    assert row.teacher is ali
    assert (row.examiner_count, row.proctor_count, row.total) == (2, 1, 3)
    assert row.to_dict() == {
        "name": "Ali", "branch": "Fizik", "examinerCount": 2, "proctorCount": 1, "total": 3,
    }


def test_duplicate_name_in_one_exam_counts_once():
    store = _store([Teacher(id=1, name="Ali")], [
        Exam(id=10, examiners=["Ali", "Ali"], proctors=["Ali"]),
    ])
    [row] = teacher_stats(store)
    assert (row.examiner_count, row.proctor_count) == (1, 1)


def test_sorted_by_total_descending_with_stable_ties():
    teachers = [
        Teacher(id=1, name="Az"),
        Teacher(id=2, name="Cok"),
        Teacher(id=3, name="Bos1"),
        Teacher(id=4, name="Orta"),
        Teacher(id=5, name="Bos2"),
    ]
    exams = [
        Exam(id=10, examiners=["Cok"], proctors=["Orta"]),
        Exam(id=11, examiners=["Cok"], proctors=["Az"]),
        Exam(id=12, examiners=["Orta"], proctors=["Cok"]),
    ]
    names = [row.teacher.name for row in teacher_stats(_store(teachers, exams))]
    assert names == ["Cok", "Orta", "Az", "Bos1", "Bos2"]


def test_malformed_role_arrays_count_as_empty():
    exam = Exam(id=10, examiners=["Ali"])
    exam.proctors = None
    store = _store([Teacher(id=1, name="Ali")], [exam])

    [row] = teacher_stats(store)

    assert (row.examiner_count, row.proctor_count) == (1, 0)


def test_missing_arrays_from_snapshot_data_count_as_empty():
    exam = Exam.from_dict({"id": 10, "date": "2025-02-10", "time": "09:00", "examiners": "Ali"})
    assert exam.examiners == []
    assert exam.proctors == []
    [row] = teacher_stats(_store([Teacher(id=1, name="Ali")], [exam]))
    assert row.total == 0


def test_duties_sorted_by_date_then_time():
    ali = Teacher(id=1, name="Ali")
    store = _store([ali], [
        Exam(id=1, date="2025-02-11", time="09:00", subject="C", examiners=["Ali"]),
        Exam(id=2, date="2025-02-10", time="13:00", subject="B", proctors=["Ali"]),
        Exam(id=3, date="2025-02-10", time="09:00", subject="A", examiners=["Ali"]),
        Exam(id=4, date="2025-02-10", time="10:00", subject="X", examiners=["Veli"]),
    ])

    assert [e.subject for e in duties_for_teacher(store, ali)] == ["A", "B", "C"]


def test_program_order_and_teachers_with_duties():
    teachers = [Teacher(id=1, name="Ali"), Teacher(id=2, name="Veli")]
    exams = [
        Exam(id=1, date="2025-02-11", time="09:00", examiners=["Ali"]),
        Exam(id=2, date="2025-02-10", time="14:00"),
        Exam(id=3, date="2025-02-10", time="09:30"),
    ]
    store = _store(teachers, exams)

    assert [e.id for e in sorted_program(store)] == [3, 2, 1]
    assert [row.teacher.name for row in teachers_with_duties(store)] == ["Ali"]
