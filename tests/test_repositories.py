import logging

import pytest  # pyright: ignore

import coursegrade
from coursegrade import (
    Category,
    GradeStore,
    GradeWeights,
    InMemoryRepository,
    QuizAttempt,
    QuizAttemptStatus,
    ScoreRecord,
    TranscriptEntry,
)

from util import START, make_quiz


# InMemoryRepository ===================================================================


def test_in_memory_repository_upsert_replaces():
    # given
    repo = InMemoryRepository()
    repo.upsert("k", 1)

    # when
    repo.upsert("k", 2)

    # then
    assert repo.get("k") == 2
    assert len(repo) == 1


def test_in_memory_repository_get_missing_is_none():
    assert InMemoryRepository().get("nope") is None


def test_in_memory_repository_list_with_filter():
    repo = InMemoryRepository({"a1": 1, "b1": 2, "a2": 3})

    assert repo.list() == [1, 2, 3]
    assert repo.list(lambda k: k.startswith("a")) == [1, 3]


def test_in_memory_repository_delete():
    repo = InMemoryRepository({"a": 1})

    assert repo.delete("a")
    assert not repo.delete("a")
    assert "a" not in repo


def test_in_memory_repository_delete_of_stored_none():
    repo = InMemoryRepository({"a": None})

    assert repo.delete("a")
    assert "a" not in repo


def test_repository_is_abstract():
    with pytest.raises(TypeError):
        coursegrade.Repository()  # pyright: ignore


# GradeStore ===========================================================================


def test_score_records_are_scoped_to_student_course_and_category():
    # given
    store = GradeStore()
    store.record_score("S1", "CS101", Category.EXAMS, ScoreRecord(8, 10, item="mt"))
    store.record_score("S1", "CS101", Category.QUIZZES, ScoreRecord(5, 10, item="q"))
    store.record_score("S2", "CS101", Category.EXAMS, ScoreRecord(1, 10, item="mt"))
    store.record_score("S1", "MA201", Category.EXAMS, ScoreRecord(2, 10, item="mt"))

    # when
    records = store.score_records("S1", "CS101", Category.EXAMS)

    # then
    assert records == [ScoreRecord(8, 10, item="mt")]


def test_recording_a_score_for_the_same_item_replaces_it():
    store = GradeStore()
    store.record_score("S1", "CS101", Category.EXAMS, ScoreRecord(8, 10, item="mt"))

    store.record_score("S1", "CS101", Category.EXAMS, ScoreRecord(9, 10, item="mt"))

    assert store.score_records("S1", "CS101", Category.EXAMS) == [
        ScoreRecord(9, 10, item="mt")
    ]


def test_record_without_item_cannot_be_stored():
    with pytest.raises(ValueError):
        GradeStore().record_score("S1", "CS101", Category.EXAMS, ScoreRecord(8, 10))


def test_one_set_of_weights_per_course():
    store = GradeStore()
    store.set_grade_weights(GradeWeights("CS101", 40, 20, 40))

    store.set_grade_weights(GradeWeights("CS101", 50, 0, 50))

    assert store.grade_weights("CS101") == GradeWeights("CS101", 50, 0, 50)
    assert store.grade_weights("MA201") is None


def test_transcript_entry_replaces_same_course_and_semester(caplog):
    # given
    store = GradeStore()
    store.record_transcript_entry("S1", TranscriptEntry("CS101", "Intro", 3, "C", "Fall 2024"))
    store.record_transcript_entry("S1", TranscriptEntry("CS101", "Intro", 3, "A", "Spring 2024"))

    # when
    with caplog.at_level(logging.INFO, logger="coursegrade"):
        store.record_transcript_entry(
            "S1", TranscriptEntry("CS101", "Intro", 3, "B", "Fall 2024")
        )

    # then
    grades = sorted(e.final_grade for e in store.transcript_entries("S1"))
    assert grades == ["A", "B"]
    assert "Replacing transcript entry" in caplog.text


def test_transcript_entries_are_per_student():
    store = GradeStore()
    store.record_transcript_entry("S1", TranscriptEntry("CS101", "Intro", 3, "A", "Fall 2024"))

    assert store.transcript_entries("S2") == []


def test_course_quizzes():
    store = GradeStore()
    store.add_quiz(make_quiz("q1", course_id="CS101"))
    store.add_quiz(make_quiz("q2", course_id="MA201"))

    assert [q.id for q in store.course_quizzes("CS101")] == ["q1"]
    assert store.quiz("q2").course_id == "MA201"
    assert store.quiz("q3") is None


def test_quiz_attempts_are_returned_in_attempt_order():
    # given
    store = GradeStore()
    for number in [2, 3, 1]:
        store.save_quiz_attempt(
            QuizAttempt(f"t{number}", "q1", "S1", number, started_at=START)
        )
    store.save_quiz_attempt(QuizAttempt("other", "q1", "S2", 1, started_at=START))

    # when
    attempts = store.quiz_attempts("q1", "S1")

    # then
    assert [a.attempt_number for a in attempts] == [1, 2, 3]


def test_in_progress_attempts():
    store = GradeStore()
    store.save_quiz_attempt(QuizAttempt("t1", "q1", "S1", 1, started_at=START))
    store.save_quiz_attempt(
        QuizAttempt(
            "t2",
            "q1",
            "S1",
            2,
            started_at=START,
            completed_at=START,
            score=3,
            status=QuizAttemptStatus.COMPLETED,
        )
    )

    assert [a.id for a in store.in_progress_attempts()] == ["t1"]


def test_store_accepts_custom_repositories():
    scores = InMemoryRepository()
    store = GradeStore(scores=scores)

    store.record_score("S1", "CS101", Category.EXAMS, ScoreRecord(8, 10, item="mt"))

    assert ("S1", "CS101", Category.EXAMS, "mt") in scores
