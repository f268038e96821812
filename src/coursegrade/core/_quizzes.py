"""Quizzes and the lifecycle of a student's attempt at one."""

from __future__ import annotations

import dataclasses
import datetime
import enum
import logging
import typing
import uuid

from ..exceptions import AttemptAlreadyFinalized


logger = logging.getLogger(__name__)

#: a student's answer to one question: one option id or several
Selection = typing.Union[str, typing.Iterable[str], None]

Clock = typing.Callable[[], datetime.datetime]


def _as_option_set(selection: Selection) -> frozenset:
    if selection is None:
        return frozenset()
    if isinstance(selection, str):
        return frozenset([selection])
    return frozenset(selection)


# quiz definitions =====================================================================


@dataclasses.dataclass(frozen=True)
class QuizQuestionOption:
    """One option of a multiple-choice question."""

    id: str
    question_id: str
    text: str
    is_correct: bool = False
    order: int = 0

    def __str__(self):
        return self.text + (" (Correct)" if self.is_correct else "")


@dataclasses.dataclass(frozen=True)
class QuizQuestion:
    """A question worth a number of points.

    A question is answered correctly when the selected options are exactly its
    correct options. There is no partial credit.

    """

    id: str
    quiz_id: str
    number: int
    text: str
    points: float
    options: typing.Tuple[QuizQuestionOption, ...] = ()

    @property
    def correct_option_ids(self) -> frozenset:
        return frozenset(o.id for o in self.options if o.is_correct)

    def points_for(self, selection: Selection) -> float:
        """Points earned for a selection. Unanswered questions earn nothing."""
        selected = _as_option_set(selection)
        if selected and selected == self.correct_option_ids:
            return self.points
        return 0


@dataclasses.dataclass(frozen=True)
class Quiz:
    """A quiz in a course.

    Attributes
    ----------
    id : str
    course_id : str
    title : str
    questions : Tuple[QuizQuestion, ...]
    total_points : Optional[float]
        Points possible on the quiz. If `None`, the sum of the question points.
    duration : Optional[datetime.timedelta]
        The time limit for an attempt, or `None` if the quiz is untimed.

    """

    id: str
    course_id: str
    title: str
    questions: typing.Tuple[QuizQuestion, ...] = ()
    total_points: typing.Optional[float] = None
    duration: typing.Optional[datetime.timedelta] = None

    @property
    def points_possible(self) -> float:
        if self.total_points is not None:
            return self.total_points
        return sum(q.points for q in self.questions)

    def score(self, answers: typing.Mapping[str, Selection]) -> float:
        """Points earned for a mapping from question id to selected option(s)."""
        return sum(q.points_for(answers.get(q.id)) for q in self.questions)

    def deadline_for(
        self, started_at: datetime.datetime
    ) -> typing.Optional[datetime.datetime]:
        """When an attempt started at `started_at` runs out of time."""
        if self.duration is None:
            return None
        return started_at + self.duration


# attempts =============================================================================


class QuizAttemptStatus(enum.Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not QuizAttemptStatus.IN_PROGRESS


class QuizAttempt:
    """A student's attempt at a quiz.

    The score and completion time are set exactly once, when the attempt moves
    from in progress to completed or timed out. After that the attempt is
    final, and any further write raises :class:`AttemptAlreadyFinalized`.

    Parameters
    ----------
    id : str
    quiz_id : str
    student_id : str
    attempt_number : int
        The number of this attempt for the student and quiz, starting at 1.
    started_at : datetime.datetime
    completed_at : Optional[datetime.datetime]
    score : Optional[float]
    status : QuizAttemptStatus
    answers : Optional[Mapping[str, Selection]]
        Answers recorded so far, by question id.

    Raises
    ------
    ValueError
        If `attempt_number` is less than one, or if `score` and
        `completed_at` are not both set for a completed or timed out attempt
        and both unset for one in progress.

    """

    def __init__(
        self,
        id: str,
        quiz_id: str,
        student_id: str,
        attempt_number: int,
        started_at: datetime.datetime,
        completed_at: typing.Optional[datetime.datetime] = None,
        score: typing.Optional[float] = None,
        status: QuizAttemptStatus = QuizAttemptStatus.IN_PROGRESS,
        answers: typing.Optional[typing.Mapping[str, Selection]] = None,
    ):
        if attempt_number < 1:
            raise ValueError(f"Attempt numbers start at 1, got {attempt_number}.")

        # score and completion time exist exactly when the attempt is final
        if status.is_terminal != (score is not None):
            raise ValueError(
                f"An attempt that is {status.name.lower()} must "
                f"{'have' if status.is_terminal else 'not have'} a score."
            )
        if status.is_terminal != (completed_at is not None):
            raise ValueError(
                f"An attempt that is {status.name.lower()} must "
                f"{'have' if status.is_terminal else 'not have'} a completion time."
            )

        self._id = id
        self._quiz_id = quiz_id
        self._student_id = student_id
        self._attempt_number = attempt_number
        self._started_at = started_at
        self._completed_at = completed_at
        self._score = score
        self._status = status
        self._answers = {
            question_id: _as_option_set(selection)
            for question_id, selection in (answers or {}).items()
        }

    def __repr__(self):
        return (
            f"QuizAttempt(id={self._id!r}, quiz_id={self._quiz_id!r}, "
            f"attempt={self._attempt_number}, status={self._status.name})"
        )

    def __eq__(self, other):
        if not isinstance(other, QuizAttempt):
            return NotImplemented
        return self._id == other._id

    def __hash__(self):
        return hash(self._id)

    # properties -----------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def quiz_id(self) -> str:
        return self._quiz_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def attempt_number(self) -> int:
        return self._attempt_number

    @property
    def started_at(self) -> datetime.datetime:
        return self._started_at

    @property
    def completed_at(self) -> typing.Optional[datetime.datetime]:
        return self._completed_at

    @property
    def score(self) -> typing.Optional[float]:
        return self._score

    @property
    def status(self) -> QuizAttemptStatus:
        return self._status

    @property
    def is_finalized(self) -> bool:
        return self._status.is_terminal

    @property
    def answers(self) -> dict[str, frozenset]:
        """A copy of the answers recorded so far."""
        return dict(self._answers)

    # writes ---------------------------------------------------------------------------

    def _check_not_finalized(self):
        if self.is_finalized:
            raise AttemptAlreadyFinalized(
                f"Quiz attempt {self._id!r} is already {self._status.name.lower()}."
            )

    def record_answer(self, question_id: str, selection: Selection):
        """Record (or change) the answer to a question while in progress.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is completed or timed out.

        """
        self._check_not_finalized()
        self._answers[question_id] = _as_option_set(selection)

    def finalize(
        self,
        status: QuizAttemptStatus,
        score: float,
        completed_at: datetime.datetime,
    ):
        """Move the attempt into a terminal state. Happens exactly once.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is already completed or timed out.
        ValueError
            If `status` is not a terminal status.

        """
        self._check_not_finalized()
        if not status.is_terminal:
            raise ValueError(f"Cannot finalize an attempt as {status.name}.")

        self._status = status
        self._score = score
        self._completed_at = completed_at


# lifecycle ============================================================================


class QuizAttemptLifecycle:
    """Drives quiz attempts from in progress to completed or timed out.

    Parameters
    ----------
    clock : Optional[Callable[[], datetime.datetime]]
        Returns the current time. Default: :meth:`datetime.datetime.now`.

    """

    def __init__(self, clock: typing.Optional[Clock] = None):
        self.clock = clock if clock is not None else datetime.datetime.now

    @staticmethod
    def _check_quiz(quiz: Quiz, attempt: QuizAttempt):
        if attempt.quiz_id != quiz.id:
            raise ValueError(
                f"Attempt {attempt.id!r} belongs to quiz {attempt.quiz_id!r}, not {quiz.id!r}."
            )

    def start(
        self,
        quiz: Quiz,
        student_id: str,
        attempt_number: int,
        attempt_id: typing.Optional[str] = None,
    ) -> QuizAttempt:
        """Begin a new attempt at `quiz`, started now."""
        attempt = QuizAttempt(
            id=attempt_id if attempt_id is not None else uuid.uuid4().hex,
            quiz_id=quiz.id,
            student_id=student_id,
            attempt_number=attempt_number,
            started_at=self.clock(),
        )
        logger.info(
            "Student %s started attempt %d at quiz %s.", student_id, attempt_number, quiz.id
        )
        return attempt

    def deadline(
        self, quiz: Quiz, attempt: QuizAttempt
    ) -> typing.Optional[datetime.datetime]:
        return quiz.deadline_for(attempt.started_at)

    def is_overdue(
        self,
        quiz: Quiz,
        attempt: QuizAttempt,
        now: typing.Optional[datetime.datetime] = None,
    ) -> bool:
        """True if the attempt is still in progress past its deadline."""
        deadline = self.deadline(quiz, attempt)
        if deadline is None or attempt.is_finalized:
            return False
        now = now if now is not None else self.clock()
        return now > deadline

    def submit(
        self,
        quiz: Quiz,
        attempt: QuizAttempt,
        answers: typing.Optional[typing.Mapping[str, Selection]] = None,
        at: typing.Optional[datetime.datetime] = None,
    ) -> QuizAttempt:
        """Submit the attempt, scoring the answers against the quiz.

        `answers` are merged over any answers recorded earlier. A submission
        that arrives after the deadline is recorded as a time-out at the
        deadline, scored only on the answers recorded before it; the late
        answers are discarded.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is already completed or timed out.

        """
        self._check_quiz(quiz, attempt)
        attempt._check_not_finalized()

        at = at if at is not None else self.clock()
        deadline = self.deadline(quiz, attempt)
        if deadline is not None and at > deadline:
            logger.warning(
                "Attempt %s was submitted after its deadline; recording it as timed out.",
                attempt.id,
            )
            return self.time_out(quiz, attempt, at=deadline)

        for question_id, selection in (answers or {}).items():
            attempt.record_answer(question_id, selection)

        attempt.finalize(QuizAttemptStatus.COMPLETED, quiz.score(attempt.answers), at)
        logger.info("Attempt %s completed with score %s.", attempt.id, attempt.score)
        return attempt

    def time_out(
        self,
        quiz: Quiz,
        attempt: QuizAttempt,
        at: typing.Optional[datetime.datetime] = None,
    ) -> QuizAttempt:
        """Finalize an attempt whose time ran out, scoring what was answered.

        The completion time is `at` if given; otherwise the deadline, or the
        current time for an untimed quiz.

        Raises
        ------
        AttemptAlreadyFinalized
            If the attempt is already completed or timed out.

        """
        self._check_quiz(quiz, attempt)
        attempt._check_not_finalized()

        if at is None:
            at = self.deadline(quiz, attempt)
        if at is None:
            at = self.clock()

        attempt.finalize(QuizAttemptStatus.TIMED_OUT, quiz.score(attempt.answers), at)
        logger.info("Attempt %s timed out with score %s.", attempt.id, attempt.score)
        return attempt
