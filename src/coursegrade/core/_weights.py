"""Per-course category weights."""

from __future__ import annotations

import dataclasses

import pandas as pd

from ..exceptions import InvalidWeights
from ._records import Category


#: weights are allowed to miss 100 by strictly less than this amount
DEFAULT_WEIGHT_TOLERANCE = 0.01


@dataclasses.dataclass(frozen=True)
class GradeWeights:
    """The weight of each grading category in a course, as percentages.

    Weights that do not add to 100 can still be created and stored, so that an
    incomplete configuration can be saved as a draft. They are only rejected
    when used to compute a grade; see :meth:`validate`.

    Attributes
    ----------
    course_id : str
        The course that owns the weights.
    assignments_weight : float
        Weight of the assignments category, between 0 and 100.
    quizzes_weight : float
        Weight of the quizzes category, between 0 and 100.
    exams_weight : float
        Weight of the exams category, between 0 and 100.

    """

    course_id: str
    assignments_weight: float
    quizzes_weight: float
    exams_weight: float

    def __str__(self):
        return (
            f"GradeWeights[{self.course_id}: assignments={self.assignments_weight:.1f}%, "
            f"quizzes={self.quizzes_weight:.1f}%, exams={self.exams_weight:.1f}%]"
        )

    def total_weight(self) -> float:
        """The sum of the three weights. Informational only."""
        return self.assignments_weight + self.quizzes_weight + self.exams_weight

    def is_valid(self, tolerance: float = DEFAULT_WEIGHT_TOLERANCE) -> bool:
        """True if the weights sum to 100, give or take `tolerance`."""
        return abs(self.total_weight() - 100) < tolerance

    def validate(self, tolerance: float = DEFAULT_WEIGHT_TOLERANCE):
        """Raise if the weights cannot be used to compute a grade.

        Raises
        ------
        InvalidWeights
            If a weight is outside of [0, 100], or the weights do not sum to
            100.

        """
        for category in Category:
            weight = self.weight_of(category)
            if not 0 <= weight <= 100:
                raise InvalidWeights(
                    f"Grade weight for {category.value} in course {self.course_id!r} "
                    f"must be between 0 and 100, got {weight}."
                )

        if not self.is_valid(tolerance):
            raise InvalidWeights(
                f"Grade weights for course {self.course_id!r} must sum to 100, "
                f"but they sum to {self.total_weight()}."
            )

    def weight_of(self, category: Category) -> float:
        return {
            Category.ASSIGNMENTS: self.assignments_weight,
            Category.QUIZZES: self.quizzes_weight,
            Category.EXAMS: self.exams_weight,
        }[category]

    def as_series(self) -> pd.Series:
        """The weights as a Series indexed by category name."""
        return pd.Series(
            {category.value: self.weight_of(category) for category in Category},
            dtype=float,
        )
