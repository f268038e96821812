"""Choosing which quiz attempt counts toward the grade."""

from collections.abc import Iterable
import logging
import typing

import pandas as _pd

from ..core import QuizAttempt, QuizAttemptStatus, Quiz, ScoreRecord


logger = logging.getLogger(__name__)


def _fmt_as_pct(f):
    return f"{f:0.2f}%"


def is_eligible(attempt: QuizAttempt, count_timed_out: bool = True) -> bool:
    """Whether an attempt's score may count toward the quizzes category.

    Attempts in progress never count. Completed attempts always count. Timed
    out attempts count unless `count_timed_out` is `False`.

    """
    if attempt.score is None:
        return False
    if attempt.status is QuizAttemptStatus.COMPLETED:
        return True
    if attempt.status is QuizAttemptStatus.TIMED_OUT:
        return count_timed_out
    return False


def attempt_scores(
    attempts: Iterable[QuizAttempt], count_timed_out: bool = True
) -> _pd.Series:
    """The scores of the eligible attempts, indexed by attempt number."""
    eligible = sorted(
        (a for a in attempts if is_eligible(a, count_timed_out)),
        key=lambda a: a.attempt_number,
    )
    return _pd.Series(
        [a.score for a in eligible],
        index=[a.attempt_number for a in eligible],
        dtype=float,
        name="score",
    )


def best_attempt(
    attempts: Iterable[QuizAttempt], *, count_timed_out: bool = True
) -> typing.Optional[QuizAttempt]:
    """The eligible attempt with the highest score.

    Ties go to the earliest attempt. Returns `None` if no attempt is eligible.

    """
    attempts = list(attempts)
    scores = attempt_scores(attempts, count_timed_out)
    if scores.empty:
        return None

    best_number = scores.idxmax()
    return next(a for a in attempts if a.attempt_number == best_number)


def take_best(
    quiz: Quiz,
    attempts: Iterable[QuizAttempt],
    *,
    count_timed_out: bool = True,
) -> ScoreRecord:
    """A score record for a quiz using the student's best attempt.

    Parameters
    ----------
    quiz : Quiz
        The quiz the attempts belong to. Its points possible are used for the
        record.
    attempts : Iterable[QuizAttempt]
        One student's attempts at the quiz.
    count_timed_out : bool
        Whether timed out attempts are eligible. Default: `True`.

    Returns
    -------
    ScoreRecord
        Ungraded if no attempt is eligible.

    """
    attempts = [a for a in attempts if a.quiz_id == quiz.id]
    best = best_attempt(attempts, count_timed_out=count_timed_out)

    if best is None:
        return ScoreRecord(None, quiz.points_possible, item=quiz.id)

    record = ScoreRecord(best.score, quiz.points_possible, item=quiz.id)
    logger.debug(
        "Quiz %s: attempt %d of %d used (%s).",
        quiz.id,
        best.attempt_number,
        len(attempts),
        _fmt_as_pct(record.percentage()),
    )
    return record
