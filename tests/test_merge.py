"""Tests for merging exam sessions."""

import pytest

from proctor_scheduler.domain.entities import Exam
from proctor_scheduler.errors import SlotConflictError
from proctor_scheduler.services.merge import MergeOperator, merged_exam


@pytest.fixture
def merger(store):
    return MergeOperator(store)


@pytest.fixture
def math_and_physics(editor):
    source = editor.create_exam(Exam(
        date="2025-02-10", time="09:00", subject="Math", grade="9. Sınıf",
        student_count=2, examiners=["Ali"], proctors=["Veli"],
    ))
    target = editor.create_exam(Exam(
        date="2025-02-10", time="09:00", subject="Physics", grade="10. Sınıf",
        student_count=1, examiners=["Can"], proctors=["Deniz"],
    ))
    return source, target


def test_merge_combines_into_target(store, merger, math_and_physics):
    source, target = math_and_physics

    result = merger.merge(source.id, target.id)

    assert result.id == target.id
    assert result.date == "2025-02-10"
    assert result.time == "09:00"
    assert result.subject == "Math / Physics"
    assert result.grade == "9. Sınıf / 10. Sınıf"
    assert result.student_count == 3
    assert result.examiners == ["Ali"]
    assert result.proctors == ["Veli"]

    assert store.get_exam(source.id) is None
    assert store.exams == [result]


def test_equal_grades_are_not_repeated():
    source = Exam(id=1, subject="A", grade="11. Sınıf")
    target = Exam(id=2, subject="B", grade="11. Sınıf")
    assert merged_exam(source, target).grade == "11. Sınıf"


def test_target_slot_and_source_staff_win():
    source = Exam(id=1, date="2025-02-10", time="09:00", subject="A",
                  examiners=["Ali", "Ayşe"], proctors=["Veli", "", "Can"])
    target = Exam(id=2, date="2025-02-11", time="13:30", subject="B",
                  examiners=["Deniz"], proctors=["Eda"])

    result = merged_exam(source, target)

    assert (result.date, result.time) == ("2025-02-11", "13:30")
    assert result.examiners == ["Ali", "Ayşe"]
    assert result.proctors == ["Veli", "", "Can"]
    assert result.examiner_count == 2
    assert result.proctor_count == 3


def test_non_numeric_student_counts_count_as_zero():
    source = Exam(id=1, subject="A", student_count="")
    target = Exam(id=2, subject="B", student_count=5)
    assert merged_exam(source, target).student_count == 5


def test_two_step_selection_merges(store, merger, math_and_physics):
    source, target = math_and_physics

    assert merger.select(source.id) is None
    assert merger.pending_source == source.id

    result = merger.select(target.id)

    assert result.id == target.id
    assert merger.pending_source is None
    assert len(store.exams) == 1


def test_selecting_same_exam_twice_cancels(store, merger, math_and_physics):
    source, _ = math_and_physics
    before = [e.to_dict() for e in store.exams]

    merger.select(source.id)
    assert merger.select(source.id) is None

    assert merger.pending_source is None
    assert [e.to_dict() for e in store.exams] == before


def test_missing_exam_is_a_noop_and_clears_selection(store, editor, merger, math_and_physics):
    source, target = math_and_physics
    merger.select(source.id)
    editor.delete_exam(source.id)

    assert merger.select(target.id) is None
    assert merger.pending_source is None
    assert store.get_exam(target.id).subject == "Physics"


def test_merge_clears_edit_buffer_of_merged_exams(store, editor, merger, math_and_physics):
    source, target = math_and_physics
    editor.edit_exam(source.id)

    merger.merge(source.id, target.id)

    assert store.editing_id is None


def test_merge_into_a_slot_where_source_staff_are_busy_is_rejected(store, editor, merger):
    source = editor.create_exam(Exam(date="2025-02-10", time="09:00", subject="A",
                                     examiners=["Ali"], proctors=[""]))
    target = editor.create_exam(Exam(date="2025-02-10", time="13:00", subject="B",
                                     examiners=["Can"], proctors=[""]))
    editor.create_exam(Exam(date="2025-02-10", time="13:00", subject="C",
                            examiners=["Ali"], proctors=[""]))
    merger.select(source.id)

    with pytest.raises(SlotConflictError):
        merger.select(target.id)

    assert merger.pending_source is None
    assert len(store.exams) == 3
    assert store.get_exam(target.id).subject == "B"


def test_merge_notifies_listeners(store, merger, math_and_physics):
    source, target = math_and_physics
    calls = []
    store.subscribe(lambda s: calls.append(len(s.exams)))

    merger.merge(source.id, target.id)

    assert calls == [1]
