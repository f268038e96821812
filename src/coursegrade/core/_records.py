"""Graded items and category summaries."""

from __future__ import annotations

import dataclasses
import enum
import typing

from .._util import is_missing
from ..exceptions import InvalidScore


class Category(enum.Enum):
    """The three grading buckets that are combined by weight."""

    ASSIGNMENTS = "assignments"
    QUIZZES = "quizzes"
    EXAMS = "exams"


@dataclasses.dataclass(frozen=True)
class ScoreRecord:
    """The points earned on a single graded item.

    A record is never modified after it is created; when an item is regraded, a
    new record replaces the old one.

    Attributes
    ----------
    points_earned : Optional[float]
        The number of points earned, or `None` if the item has not been graded.
        NaN is treated the same as `None`.
    points_possible : float
        The maximum number of points on the item. Must be positive.
    item : Optional[str]
        An identifier for the graded item (assignment, quiz or exam), used to
        replace the record on regrade.

    Raises
    ------
    InvalidScore
        If `points_possible` is missing or not positive.

    """

    points_earned: typing.Optional[float]
    points_possible: float
    item: typing.Optional[str] = None

    def __post_init__(self):
        if is_missing(self.points_possible) or not self.points_possible > 0:
            raise InvalidScore(
                f"Points possible must be positive, got {self.points_possible!r}."
            )

    @property
    def is_graded(self) -> bool:
        return not is_missing(self.points_earned)

    def percentage(self) -> typing.Optional[float]:
        """The score as a percentage of the points possible.

        Extra credit above 100% is kept. Negative scores are raised to zero.

        Returns
        -------
        Optional[float]
            `None` if the item has not been graded.

        """
        if not self.is_graded:
            return None
        return max(0.0, self.points_earned / self.points_possible * 100)

    def regraded(self, points_earned: typing.Optional[float]) -> "ScoreRecord":
        """A new record for the same item with a different number of points earned."""
        return dataclasses.replace(self, points_earned=points_earned)


@dataclasses.dataclass(frozen=True)
class CategoryScore:
    """A student's aggregated score in one category of one course.

    Attributes
    ----------
    category : Category
    percentage : Optional[float]
        The category percentage, or `None` if no item in the category is graded.
    item_count : int
        The number of graded items that went into the percentage.

    """

    category: Category
    percentage: typing.Optional[float]
    item_count: int

    @property
    def is_defined(self) -> bool:
        return self.percentage is not None
