"""A package for computing weighted course grades and transcript GPAs."""

from .core import (
    Points,
    Percentage,
    Category,
    ScoreRecord,
    CategoryScore,
    GradeWeights,
    GradingOptions,
    CategoryAggregator,
    CourseGradeCalculator,
    CourseGradeResult,
    NoGradeYet,
    TranscriptEntry,
    TranscriptBuilder,
    GPAResult,
    NoGPA,
    semester_sort_key,
    Quiz,
    QuizQuestion,
    QuizQuestionOption,
    QuizAttempt,
    QuizAttemptStatus,
    QuizAttemptLifecycle,
)

from .exceptions import (
    CourseGradeError,
    InvalidScore,
    InvalidWeights,
    AttemptAlreadyFinalized,
    UnknownEntity,
)

from .scales import (
    DEFAULT_SCALE,
    ROUNDED_DEFAULT_SCALE,
    GRADE_POINTS,
    GradePointMapper,
    grade_points,
    letter_grade,
    map_scores_to_letter_grades,
)

from .repositories import Repository, InMemoryRepository, GradeStore
from .engine import GradingEngine

from . import io
from . import policies
from . import scales

__all__ = [
    "Points",
    "Percentage",
    "Category",
    "ScoreRecord",
    "CategoryScore",
    "GradeWeights",
    "GradingOptions",
    "CategoryAggregator",
    "CourseGradeCalculator",
    "CourseGradeResult",
    "NoGradeYet",
    "TranscriptEntry",
    "TranscriptBuilder",
    "GPAResult",
    "NoGPA",
    "semester_sort_key",
    "Quiz",
    "QuizQuestion",
    "QuizQuestionOption",
    "QuizAttempt",
    "QuizAttemptStatus",
    "QuizAttemptLifecycle",
    "CourseGradeError",
    "InvalidScore",
    "InvalidWeights",
    "AttemptAlreadyFinalized",
    "UnknownEntity",
    "DEFAULT_SCALE",
    "ROUNDED_DEFAULT_SCALE",
    "GRADE_POINTS",
    "GradePointMapper",
    "grade_points",
    "letter_grade",
    "map_scores_to_letter_grades",
    "Repository",
    "InMemoryRepository",
    "GradeStore",
    "GradingEngine",
    "io",
    "policies",
    "scales",
]
