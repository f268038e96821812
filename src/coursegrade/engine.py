"""Computing grades and driving quiz attempts over a :class:`GradeStore`."""

from __future__ import annotations

import logging
import typing

import numpy as np
import pandas as pd

from .core import (
    Category,
    CategoryAggregator,
    CategoryScore,
    CourseGradeCalculator,
    CourseGradeResult,
    GPAResult,
    GradingOptions,
    NoGPA,
    NoGradeYet,
    Quiz,
    QuizAttempt,
    QuizAttemptLifecycle,
    ScoreRecord,
    TranscriptBuilder,
    TranscriptEntry,
)
from .core._quizzes import Clock, Selection
from .exceptions import InvalidWeights, UnknownEntity
from .policies.attempts import take_best
from .repositories import GradeStore
from .scales import GradePointMapper


logger = logging.getLogger(__name__)

GRADE_TABLE_COLUMNS = [
    "assignments",
    "quizzes",
    "exams",
    "final_percentage",
    "letter_grade",
]


class GradingEngine:
    """Computes course grades and GPAs, and finalizes quiz attempts.

    The engine keeps no state of its own: every computation reads the current
    data from the store, so calling it twice with unchanged data gives the same
    result.

    Parameters
    ----------
    store : GradeStore
        Where score records, weights, transcripts, quizzes and attempts live.
    options : Optional[GradingOptions]
        Default: :class:`GradingOptions` with its defaults.
    clock : Optional[Callable[[], datetime.datetime]]
        The current time, for quiz attempts. Default: :meth:`datetime.datetime.now`.

    """

    def __init__(
        self,
        store: GradeStore,
        options: typing.Optional[GradingOptions] = None,
        clock: typing.Optional[Clock] = None,
    ):
        self.store = store
        self.options = options if options is not None else GradingOptions()
        self.aggregator = CategoryAggregator(method=self.options.category_method)
        self.calculator = CourseGradeCalculator(
            scale=self.options.scale, weight_tolerance=self.options.weight_tolerance
        )
        self.transcript_builder = TranscriptBuilder(
            GradePointMapper(strict=self.options.strict_letter_grades)
        )
        self.lifecycle = QuizAttemptLifecycle(clock=clock)

    def __repr__(self):
        return f"<{self.__class__.__name__} with {self.options!r}>"

    # lookups --------------------------------------------------------------------------

    def _weights(self, course_id: str):
        weights = self.store.grade_weights(course_id)
        if weights is None:
            raise InvalidWeights(f"No grade weights are configured for course {course_id!r}.")
        weights.validate(self.options.weight_tolerance)
        return weights

    def _quiz(self, quiz_id: str) -> Quiz:
        quiz = self.store.quiz(quiz_id)
        if quiz is None:
            raise UnknownEntity(f"No quiz with id {quiz_id!r}.")
        return quiz

    def _attempt(self, attempt_id: str) -> QuizAttempt:
        attempt = self.store.quiz_attempt(attempt_id)
        if attempt is None:
            raise UnknownEntity(f"No quiz attempt with id {attempt_id!r}.")
        return attempt

    # category scores ------------------------------------------------------------------

    def category_records(
        self, student_id: str, course_id: str, category: Category
    ) -> typing.List[ScoreRecord]:
        """The score records that count toward a category.

        For quizzes, these are the stored quiz records plus, for every quiz in
        the course, a record for the student's best eligible attempt.

        """
        records = list(self.store.score_records(student_id, course_id, category))

        if category is Category.QUIZZES:
            for quiz in self.store.course_quizzes(course_id):
                attempts = self.store.quiz_attempts(quiz.id, student_id)
                if attempts:
                    records.append(
                        take_best(
                            quiz,
                            attempts,
                            count_timed_out=self.options.count_timed_out_attempts,
                        )
                    )

        return records

    def category_scores(
        self, student_id: str, course_id: str
    ) -> typing.Dict[Category, CategoryScore]:
        """The student's aggregated score in each category of the course."""
        return {
            category: self.aggregator.aggregate(
                category, self.category_records(student_id, course_id, category)
            )
            for category in Category
        }

    # course grades --------------------------------------------------------------------

    def compute_course_grade(
        self, student_id: str, course_id: str
    ) -> typing.Union[CourseGradeResult, NoGradeYet]:
        """Compute a student's grade in a course.

        Returns
        -------
        Union[CourseGradeResult, NoGradeYet]
            :class:`NoGradeYet` if the student has no graded work in any
            weighted category.

        Raises
        ------
        InvalidWeights
            If the course has no weights, or they do not sum to 100.

        """
        weights = self._weights(course_id)
        scores = self.category_scores(student_id, course_id)

        return self.calculator.calculate(
            weights,
            assignments=scores[Category.ASSIGNMENTS].percentage,
            quizzes=scores[Category.QUIZZES].percentage,
            exams=scores[Category.EXAMS].percentage,
            student_id=student_id,
        )

    def course_grade_table(
        self,
        course_id: str,
        student_ids: typing.Iterable[str],
        current_grades: typing.Optional[typing.Mapping[str, str]] = None,
    ) -> pd.DataFrame:
        """The computed grades of every student on a course roster.

        Parameters
        ----------
        course_id : str
        student_ids : Iterable[str]
            The students enrolled in the course.
        current_grades : Optional[Mapping[str, str]]
            The letter grades currently on record, by student id. If given, the
            table also has a ``current_grade`` column and an ``overridden``
            column that is `True` where the grade on record differs from the
            computed one.

        Returns
        -------
        pandas.DataFrame
            One row per student, indexed by student id, with columns
            ``assignments``, ``quizzes``, ``exams``, ``final_percentage`` and
            ``letter_grade``. Students with no grade yet have `NaN` entries.

        Raises
        ------
        InvalidWeights
            If the course has no weights, or they do not sum to 100.

        """
        self._weights(course_id)
        student_ids = list(student_ids)

        rows = {}
        for student_id in student_ids:
            result = self.compute_course_grade(student_id, course_id)
            if isinstance(result, NoGradeYet):
                rows[student_id] = [np.nan] * len(GRADE_TABLE_COLUMNS)
            else:
                rows[student_id] = [
                    result.assignments_pct,
                    result.quizzes_pct,
                    result.exams_pct,
                    result.final_percentage,
                    result.letter_grade,
                ]

        table = pd.DataFrame.from_dict(
            rows, orient="index", columns=GRADE_TABLE_COLUMNS
        ).reindex(student_ids)
        for column in GRADE_TABLE_COLUMNS[:-1]:
            table[column] = table[column].astype(float)
        table.index.name = "student_id"

        if current_grades is not None:
            table["current_grade"] = pd.Series(current_grades, dtype=object).reindex(
                table.index
            )
            table["overridden"] = (
                table["current_grade"].notna()
                & (table["current_grade"] != table["letter_grade"])
            )

        return table

    def finalize_course_grade(
        self,
        student_id: str,
        course_id: str,
        course_code: str,
        course_name: str,
        credits: int,
        semester: str,
    ) -> typing.Optional[TranscriptEntry]:
        """Record the student's computed course grade on their transcript.

        An existing entry for the same course code and semester is replaced.

        Returns
        -------
        Optional[TranscriptEntry]
            The new entry, or `None` if the student has no grade yet, in which
            case nothing is recorded.

        """
        result = self.compute_course_grade(student_id, course_id)
        if isinstance(result, NoGradeYet):
            logger.info(
                "Student %s has no grade yet in %s; nothing recorded.", student_id, course_id
            )
            return None

        entry = TranscriptEntry.from_course_grade(
            result, course_code, course_name, credits, semester
        )
        self.store.record_transcript_entry(student_id, entry)
        logger.info(
            "Recorded %s in %s (%s) for student %s.",
            entry.final_grade,
            course_code,
            semester,
            student_id,
        )
        return entry

    # GPA ------------------------------------------------------------------------------

    def compute_gpa(self, student_id: str) -> typing.Union[GPAResult, NoGPA]:
        """Compute a student's GPA from their transcript.

        Returns
        -------
        Union[GPAResult, NoGPA]
            :class:`NoGPA` if the transcript has no credit-bearing entries.

        """
        entries = self.store.transcript_entries(student_id)
        return self.transcript_builder.build(student_id, entries)

    # quiz attempts --------------------------------------------------------------------

    def start_quiz_attempt(self, quiz_id: str, student_id: str) -> QuizAttempt:
        """Start the student's next attempt at a quiz.

        The attempt number is one more than the number of earlier attempts. Any
        limit on the number of attempts is enforced elsewhere.

        """
        quiz = self._quiz(quiz_id)
        attempt_number = len(self.store.quiz_attempts(quiz_id, student_id)) + 1
        attempt = self.lifecycle.start(quiz, student_id, attempt_number)
        self.store.save_quiz_attempt(attempt)
        return attempt

    def record_quiz_answer(
        self, attempt_id: str, question_id: str, selection: Selection
    ) -> QuizAttempt:
        """Record an answer on an attempt in progress.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is completed or timed out.

        """
        attempt = self._attempt(attempt_id)
        attempt.record_answer(question_id, selection)
        self.store.save_quiz_attempt(attempt)
        return attempt

    def submit_quiz_attempt(
        self,
        attempt_id: str,
        answers: typing.Optional[typing.Mapping[str, Selection]] = None,
    ) -> QuizAttempt:
        """Submit an attempt, scoring it against its quiz.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is completed or timed out.
        UnknownEntity
            If the attempt or its quiz is not in the store.

        """
        attempt = self._attempt(attempt_id)
        quiz = self._quiz(attempt.quiz_id)
        self.lifecycle.submit(quiz, attempt, answers)
        self.store.save_quiz_attempt(attempt)
        return attempt

    def time_out_quiz_attempt(self, attempt_id: str) -> QuizAttempt:
        """Finalize an attempt whose time ran out, scoring what was answered.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is completed or timed out.
        UnknownEntity
            If the attempt or its quiz is not in the store.

        """
        attempt = self._attempt(attempt_id)
        quiz = self._quiz(attempt.quiz_id)
        self.lifecycle.time_out(quiz, attempt)
        self.store.save_quiz_attempt(attempt)
        return attempt

    def time_out_expired_attempts(self, now=None) -> typing.List[QuizAttempt]:
        """Time out every attempt in progress whose deadline has passed.

        Meant to be called periodically by a scheduler. Attempts that are
        already finalized are left alone, so each attempt times out once.

        Returns
        -------
        List[QuizAttempt]
            The attempts that were timed out by this call.

        """
        now = now if now is not None else self.lifecycle.clock()

        timed_out = []
        for attempt in self.store.in_progress_attempts():
            quiz = self._quiz(attempt.quiz_id)
            if self.lifecycle.is_overdue(quiz, attempt, now):
                self.lifecycle.time_out(quiz, attempt)
                self.store.save_quiz_attempt(attempt)
                timed_out.append(attempt)

        return timed_out
