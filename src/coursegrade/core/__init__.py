from ._amounts import Points, Percentage
from ._records import Category, ScoreRecord, CategoryScore
from ._weights import GradeWeights
from ._options import GradingOptions
from ._aggregate import CategoryAggregator
from ._course import CourseGradeCalculator, CourseGradeResult, NoGradeYet
from ._transcript import (
    TranscriptEntry,
    TranscriptBuilder,
    GPAResult,
    NoGPA,
    semester_sort_key,
)
from ._quizzes import (
    Quiz,
    QuizQuestion,
    QuizQuestionOption,
    QuizAttempt,
    QuizAttemptStatus,
    QuizAttemptLifecycle,
)

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
]
