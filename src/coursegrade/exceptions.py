"""Exceptions raised by the grading engine."""


class CourseGradeError(Exception):
    """Base class for all errors raised by :mod:`coursegrade`."""


class InvalidScore(CourseGradeError, ValueError):
    """Raised when a score record is built with non-positive points possible."""


class InvalidWeights(CourseGradeError, ValueError):
    """Raised when a course's grade weights cannot be used to compute a grade.

    Either the weights do not sum to 100 (within tolerance), or the course has
    no weights configured at all.

    """


class AttemptAlreadyFinalized(CourseGradeError, RuntimeError):
    """Raised on any write to a quiz attempt that is completed or timed out."""


class UnknownEntity(CourseGradeError, KeyError):
    """Raised when a quiz or quiz attempt id is not held by the store."""
