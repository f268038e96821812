"""Combining category percentages into a course grade."""

from __future__ import annotations

import dataclasses
import logging
import typing

import numpy as np
import pandas as pd

from .._util import optional_float
from ..scales import DEFAULT_SCALE, letter_grade, validate_scale
from ._records import Category
from ._weights import DEFAULT_WEIGHT_TOLERANCE, GradeWeights


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CourseGradeResult:
    """A student's computed grade in a course.

    Attributes
    ----------
    student_id : Optional[str]
    course_id : str
    assignments_pct : Optional[float]
        The assignments category percentage, or `None` if nothing is graded.
    quizzes_pct : Optional[float]
        The quizzes category percentage, or `None` if nothing is graded.
    exams_pct : Optional[float]
        The exams category percentage, or `None` if nothing is graded.
    final_percentage : float
        The weighted course percentage over the categories that have a grade.
    letter_grade : str
        The letter grade for `final_percentage`.

    """

    student_id: typing.Optional[str]
    course_id: str
    assignments_pct: typing.Optional[float]
    quizzes_pct: typing.Optional[float]
    exams_pct: typing.Optional[float]
    final_percentage: float
    letter_grade: str


@dataclasses.dataclass(frozen=True)
class NoGradeYet:
    """Result for a student with no graded work in any weighted category.

    This is not an error. It is distinct from a grade of zero.

    """

    student_id: typing.Optional[str]
    course_id: str


class CourseGradeCalculator:
    """Computes a course percentage and letter grade from category percentages.

    Categories without a percentage are dropped and the remaining weights are
    renormalized, so that missing work makes the grade incomplete rather than
    lower. For example, with weights of 40/20/40 and no quiz grades, the
    assignments and exams are each worth half of the course grade.

    Parameters
    ----------
    scale : Optional[OrderedDict]
        An ordered mapping from letter grades to percentage thresholds.
        Default: :attr:`coursegrade.scales.DEFAULT_SCALE`.
    weight_tolerance : float
        How far the weights may be from summing to 100. Default: 0.01.

    """

    def __init__(self, scale=None, weight_tolerance: float = DEFAULT_WEIGHT_TOLERANCE):
        if scale is None:
            scale = DEFAULT_SCALE
        else:
            validate_scale(scale)
        self.scale = scale
        self.weight_tolerance = weight_tolerance

    def final_percentage(
        self,
        weights: GradeWeights,
        assignments: typing.Optional[float] = None,
        quizzes: typing.Optional[float] = None,
        exams: typing.Optional[float] = None,
    ) -> typing.Optional[float]:
        """The renormalized weighted percentage, or `None` if there is nothing to weigh.

        Raises
        ------
        InvalidWeights
            If the weights do not sum to 100.

        """
        weights.validate(self.weight_tolerance)

        percentages = pd.Series(
            {
                Category.ASSIGNMENTS.value: assignments,
                Category.QUIZZES.value: quizzes,
                Category.EXAMS.value: exams,
            },
            dtype=float,
        )
        available = percentages.notna()
        weight = weights.as_series()[available]

        total_weight = weight.sum()
        if total_weight == 0:
            return None

        logger.debug(
            "Course %s: weighing %s over a total weight of %s.",
            weights.course_id,
            list(weight.index),
            total_weight,
        )
        return float(np.average(percentages[available], weights=weight))

    def calculate(
        self,
        weights: GradeWeights,
        assignments: typing.Optional[float] = None,
        quizzes: typing.Optional[float] = None,
        exams: typing.Optional[float] = None,
        *,
        student_id: typing.Optional[str] = None,
    ) -> typing.Union[CourseGradeResult, NoGradeYet]:
        """Compute the course grade.

        Parameters
        ----------
        weights : GradeWeights
            The course's category weights.
        assignments, quizzes, exams : Optional[float]
            The category percentages. `None` (or NaN) means the category has no
            graded work yet.
        student_id : Optional[str]
            Copied into the result.

        Returns
        -------
        Union[CourseGradeResult, NoGradeYet]
            :class:`NoGradeYet` if none of the categories with a percentage
            carries any weight.

        Raises
        ------
        InvalidWeights
            If the weights do not sum to 100.

        """
        final = self.final_percentage(weights, assignments, quizzes, exams)

        if final is None:
            return NoGradeYet(student_id=student_id, course_id=weights.course_id)

        return CourseGradeResult(
            student_id=student_id,
            course_id=weights.course_id,
            assignments_pct=optional_float(assignments),
            quizzes_pct=optional_float(quizzes),
            exams_pct=optional_float(exams),
            final_percentage=final,
            letter_grade=letter_grade(final, self.scale),
        )
