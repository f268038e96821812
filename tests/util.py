import datetime

import coursegrade
from coursegrade import ScoreRecord


START = datetime.datetime(2024, 10, 1, 9, 0, 0)


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + datetime.timedelta(**kwargs)


def make_quiz(quiz_id="q1", course_id="CS101", minutes=30):
    """A two-question quiz worth 10 points: "a" is worth 4 and "b" is worth 6."""
    questions = []
    for number, (question_id, points) in enumerate([("a", 4), ("b", 6)], start=1):
        options = (
            coursegrade.QuizQuestionOption(
                id=f"{question_id}-right",
                question_id=question_id,
                text="right",
                is_correct=True,
            ),
            coursegrade.QuizQuestionOption(
                id=f"{question_id}-wrong", question_id=question_id, text="wrong"
            ),
        )
        questions.append(
            coursegrade.QuizQuestion(
                id=question_id,
                quiz_id=quiz_id,
                number=number,
                text=f"Question {number}",
                points=points,
                options=options,
            )
        )

    return coursegrade.Quiz(
        id=quiz_id,
        course_id=course_id,
        title=f"Quiz {quiz_id}",
        questions=tuple(questions),
        duration=datetime.timedelta(minutes=minutes) if minutes is not None else None,
    )


def add_scores(store, student_id, course_id, category, scores):
    """Store records from a dict mapping item to (earned, possible)."""
    for item, (earned, possible) in scores.items():
        store.record_score(
            student_id, course_id, category, ScoreRecord(earned, possible, item=item)
        )


def make_store(weights=(40, 20, 40)):
    """A store for CS101 holding the given weights and no scores."""
    store = coursegrade.GradeStore()
    store.set_grade_weights(coursegrade.GradeWeights("CS101", *weights))
    return store


def assert_attempt_is_final(attempt, status):
    assert attempt.status is status
    assert attempt.is_finalized
    assert attempt.score is not None
    assert attempt.completed_at is not None
    assert attempt.completed_at >= attempt.started_at

