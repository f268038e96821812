"""Storage interfaces the grading engine reads from.

The engine never owns data. It reads score records, grade weights, transcript
entries, quizzes and quiz attempts through a :class:`GradeStore`, whose
repositories can be swapped for ones backed by a real database.

"""

from __future__ import annotations

import abc
import logging
import typing

from .core import (
    Category,
    GradeWeights,
    Quiz,
    QuizAttempt,
    QuizAttemptStatus,
    ScoreRecord,
    TranscriptEntry,
)


logger = logging.getLogger(__name__)

K = typing.TypeVar("K")
V = typing.TypeVar("V")

ScoreKey = typing.Tuple[str, str, Category, str]
TranscriptKey = typing.Tuple[str, str, str]


class Repository(abc.ABC, typing.Generic[K, V]):
    """A keyed collection of values."""

    @abc.abstractmethod
    def get(self, key: K) -> typing.Optional[V]:
        """The value stored under `key`, or `None`."""

    @abc.abstractmethod
    def list(
        self, where: typing.Optional[typing.Callable[[K], bool]] = None
    ) -> typing.List[V]:
        """All values, or those whose key satisfies `where`, in insertion order."""

    @abc.abstractmethod
    def upsert(self, key: K, value: V) -> None:
        """Store `value` under `key`, replacing any existing value."""

    @abc.abstractmethod
    def delete(self, key: K) -> bool:
        """Remove the value under `key`. Returns `False` if there was none."""


class InMemoryRepository(Repository[K, V]):
    """A repository backed by a dictionary."""

    def __init__(self, items: typing.Optional[typing.Mapping[K, V]] = None):
        self._items: typing.Dict[K, V] = dict(items or {})

    def __len__(self):
        return len(self._items)

    def __contains__(self, key):
        return key in self._items

    def get(self, key: K) -> typing.Optional[V]:
        return self._items.get(key)

    def list(
        self, where: typing.Optional[typing.Callable[[K], bool]] = None
    ) -> typing.List[V]:
        return [v for k, v in self._items.items() if where is None or where(k)]

    def upsert(self, key: K, value: V) -> None:
        self._items[key] = value

    def delete(self, key: K) -> bool:
        if key not in self._items:
            return False
        del self._items[key]
        return True


class GradeStore:
    """The data the grading engine works on.

    Parameters
    ----------
    scores : Optional[Repository]
        Score records keyed by ``(student_id, course_id, category, item)``.
    weights : Optional[Repository]
        Grade weights keyed by course id. One active set per course.
    transcripts : Optional[Repository]
        Transcript entries keyed by ``(student_id, course_code, semester)``.
    quizzes : Optional[Repository]
        Quizzes keyed by quiz id.
    attempts : Optional[Repository]
        Quiz attempts keyed by attempt id.

    Any repository not given is an empty :class:`InMemoryRepository`.

    """

    def __init__(
        self,
        scores: typing.Optional[Repository[ScoreKey, ScoreRecord]] = None,
        weights: typing.Optional[Repository[str, GradeWeights]] = None,
        transcripts: typing.Optional[Repository[TranscriptKey, TranscriptEntry]] = None,
        quizzes: typing.Optional[Repository[str, Quiz]] = None,
        attempts: typing.Optional[Repository[str, QuizAttempt]] = None,
    ):
        self.scores = scores if scores is not None else InMemoryRepository()
        self.weights = weights if weights is not None else InMemoryRepository()
        self.transcripts = (
            transcripts if transcripts is not None else InMemoryRepository()
        )
        self.quizzes = quizzes if quizzes is not None else InMemoryRepository()
        self.attempts = attempts if attempts is not None else InMemoryRepository()

    # score records --------------------------------------------------------------------

    def record_score(
        self, student_id: str, course_id: str, category: Category, record: ScoreRecord
    ):
        """Store a score record, replacing the record for the same item.

        Raises
        ------
        ValueError
            If the record has no item identifier.

        """
        if record.item is None:
            raise ValueError("Score records must name their item to be stored.")
        self.scores.upsert((student_id, course_id, category, record.item), record)

    def score_record(
        self, student_id: str, course_id: str, category: Category, item: str
    ) -> typing.Optional[ScoreRecord]:
        return self.scores.get((student_id, course_id, category, item))

    def score_records(
        self, student_id: str, course_id: str, category: Category
    ) -> typing.List[ScoreRecord]:
        """A student's score records in one category of a course."""
        return self.scores.list(lambda k: k[:3] == (student_id, course_id, category))

    # weights --------------------------------------------------------------------------

    def set_grade_weights(self, weights: GradeWeights):
        """Store the active weights for a course. Invalid weights may be stored."""
        self.weights.upsert(weights.course_id, weights)

    def grade_weights(self, course_id: str) -> typing.Optional[GradeWeights]:
        return self.weights.get(course_id)

    # transcripts ----------------------------------------------------------------------

    def record_transcript_entry(self, student_id: str, entry: TranscriptEntry):
        """Store a transcript entry, replacing an entry for the same course and semester."""
        key = (student_id, entry.course_code, entry.semester)
        if self.transcripts.get(key) is not None:
            logger.info(
                "Replacing transcript entry for %s in %s for student %s.",
                entry.course_code,
                entry.semester,
                student_id,
            )
        self.transcripts.upsert(key, entry)

    def transcript_entries(self, student_id: str) -> typing.List[TranscriptEntry]:
        return self.transcripts.list(lambda k: k[0] == student_id)

    # quizzes --------------------------------------------------------------------------

    def add_quiz(self, quiz: Quiz):
        self.quizzes.upsert(quiz.id, quiz)

    def quiz(self, quiz_id: str) -> typing.Optional[Quiz]:
        return self.quizzes.get(quiz_id)

    def course_quizzes(self, course_id: str) -> typing.List[Quiz]:
        return [q for q in self.quizzes.list() if q.course_id == course_id]

    def save_quiz_attempt(self, attempt: QuizAttempt):
        self.attempts.upsert(attempt.id, attempt)

    def quiz_attempt(self, attempt_id: str) -> typing.Optional[QuizAttempt]:
        return self.attempts.get(attempt_id)

    def quiz_attempts(self, quiz_id: str, student_id: str) -> typing.List[QuizAttempt]:
        """A student's attempts at a quiz, in attempt order."""
        attempts = [
            a
            for a in self.attempts.list()
            if a.quiz_id == quiz_id and a.student_id == student_id
        ]
        return sorted(attempts, key=lambda a: a.attempt_number)

    def in_progress_attempts(self) -> typing.List[QuizAttempt]:
        return [
            a for a in self.attempts.list() if a.status is QuizAttemptStatus.IN_PROGRESS
        ]
