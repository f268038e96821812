"""Mapping percentages to letter grades, and letter grades to grade points."""

import collections
import logging
import typing

import numpy as np
import pandas as pd

from ._util import is_missing


logger = logging.getLogger(__name__)


# common scales ========================================================================

DEFAULT_SCALE = collections.OrderedDict(
    [
        ("A+", 97),
        ("A", 93),
        ("A-", 90),
        ("B+", 87),
        ("B", 83),
        ("B-", 80),
        ("C+", 77),
        ("C", 73),
        ("C-", 70),
        ("D+", 67),
        ("D", 63),
        ("D-", 60),
        ("F", 0),
    ]
)
"""The default grading scale. Thresholds are percentages; ties go to the higher letter."""

#: a rounded version of the default scale, where each threshold is one half point lower
ROUNDED_DEFAULT_SCALE = DEFAULT_SCALE.copy()
for _k, _v in ROUNDED_DEFAULT_SCALE.items():
    ROUNDED_DEFAULT_SCALE[_k] = _v - 0.5
ROUNDED_DEFAULT_SCALE["F"] = 0
"""The default grading scale in which scores are rounded up. E.g., a 92.5% is an A."""

GRADE_POINTS = {
    "A+": 4.0,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "D-": 0.0,
    "F": 0.0,
}
"""Grade points on the 4.0 scale for each recognized letter grade."""


# helper functions =====================================================================


def _check_that_scale_monotonically_decreases(scale):
    prev = float("inf")
    for threshold in scale.values():
        if threshold >= prev:
            raise ValueError("Scale is not monotonically decreasing.")
        prev = threshold


def validate_scale(scale: typing.Mapping[str, float]):
    """Check that a grading scale can be used to assign letter grades.

    Parameters
    ----------
    scale : Mapping[str, float]
        An ordered mapping from letter grades to their thresholds.

    Raises
    ------
    ValueError
        If the scale is empty, is not strictly decreasing, or contains a letter
        grade that has no grade-point value.

    """
    if not scale:
        raise ValueError("Scale cannot be empty.")

    unknown = [letter for letter in scale if letter not in GRADE_POINTS]
    if unknown:
        raise ValueError(
            f"Scale has invalid letter grades {unknown}. Must be in {set(GRADE_POINTS)}"
        )

    _check_that_scale_monotonically_decreases(scale)


# public functions =====================================================================


def letter_grade(score: float, scale=None) -> str:
    """Map a single percentage to a letter grade.

    Parameters
    ----------
    score : float
        A percentage, usually between 0 and 100.
    scale : OrderedDict
        An ordered dictionary mapping letter grades to their thresholds.
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    str
        The first letter whose threshold the score meets. Scores below every
        threshold are an "F".

    """
    if scale is None:
        scale = DEFAULT_SCALE

    for letter, threshold in scale.items():
        if score >= threshold:
            return letter
    else:
        return "F"


def map_scores_to_letter_grades(scores, scale=None):
    """Map each percentage to a letter grade.

    Parameters
    ----------
    scores : pandas.Series
        A series containing percentages as floats between 0 and 100. Missing
        scores (`NaN`) are left missing.
    scale : OrderedDict
        An ordered dictionary mapping letter grades to their thresholds.
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pandas.Series
        A series containing the resulting letter grades.

    Raises
    ------
    ValueError
        If the provided scale has invalid letter grades.

    """
    if scale is None:
        scale = DEFAULT_SCALE
    else:
        validate_scale(scale)

    values = scores.to_numpy(dtype=float)
    conditions = [values >= threshold for threshold in scale.values()]
    letters = np.select(conditions, list(scale), default="F").astype(object)
    letters[np.isnan(values)] = np.nan

    return pd.Series(letters, index=scores.index, name=scores.name)


# grade points =========================================================================


class GradePointMapper:
    """Maps letter grades to grade points on the 4.0 scale.

    Lookups are case-insensitive and ignore surrounding whitespace. `None` and
    the empty string map to 0.0.

    Parameters
    ----------
    points : Optional[Mapping[str, float]]
        The table of grade points. Default: :attr:`GRADE_POINTS`.
    strict : bool
        If `False` (the default), an unrecognized letter grade is worth 0.0, the
        same as an "F". If `True`, it raises a `ValueError` instead.

    """

    def __init__(self, points=None, strict: bool = False):
        if points is None:
            points = GRADE_POINTS
        self.points = {letter.upper(): value for letter, value in points.items()}
        self.strict = strict

    def __repr__(self):
        return f"GradePointMapper(strict={self.strict!r})"

    def __call__(self, letter: typing.Optional[str]) -> float:
        if is_missing(letter) or not letter.strip():
            return 0.0

        key = letter.strip().upper()
        if key in self.points:
            return self.points[key]

        if self.strict:
            raise ValueError(f'Unrecognized letter grade "{letter}".')

        logger.debug("Unrecognized letter grade %r counted as 0.0 grade points.", letter)
        return 0.0

    def map(self, letters: pd.Series) -> pd.Series:
        """Map a series of letter grades to grade points."""
        return letters.map(self).astype(float)


def grade_points(letter: typing.Optional[str]) -> float:
    """Grade points for a letter grade using the default table.

    Unrecognized letters, `None`, and the empty string are worth 0.0.

    """
    return GradePointMapper()(letter)
