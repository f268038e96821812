"""Configuration for the grading engine."""

from __future__ import annotations

import dataclasses
import typing

from ..scales import DEFAULT_SCALE, validate_scale
from ._weights import DEFAULT_WEIGHT_TOLERANCE


CATEGORY_METHODS = ("mean", "total")


@dataclasses.dataclass
class GradingOptions:
    """Configures the behavior of a :class:`GradingEngine`.

    Attributes
    ----------
    weight_tolerance: float
        How far the category weights of a course may be from summing to 100
        before they are rejected. Default: 0.01.

    scale: Optional[OrderedDict]
        An ordered mapping from letter grades to percentage thresholds used to
        assign letter grades. If `None`, :attr:`coursegrade.scales.DEFAULT_SCALE`
        is used. A scale can be read from disk with
        :func:`coursegrade.io.scales.read`.

    category_method: str
        How the items in a category are combined. ``"mean"`` averages the
        percentage of each graded item, so every item counts equally.
        ``"total"`` divides the total points earned by the total points
        possible, so items worth more points count for more. Default: ``"mean"``.

    count_timed_out_attempts: bool
        If `True`, quiz attempts that timed out are eligible to be the student's
        best attempt. If `False`, only completed attempts are. Default: `True`.

    strict_letter_grades: bool
        If `True`, computing a GPA from a transcript entry with an unrecognized
        letter grade raises a `ValueError` rather than counting it as 0.0.
        Default: `False`.

    """

    weight_tolerance: float = DEFAULT_WEIGHT_TOLERANCE
    scale: typing.Optional[typing.Mapping[str, float]] = None
    category_method: str = "mean"
    count_timed_out_attempts: bool = True
    strict_letter_grades: bool = False

    def __post_init__(self):
        if self.scale is None:
            self.scale = DEFAULT_SCALE
        else:
            validate_scale(self.scale)

        if self.category_method not in CATEGORY_METHODS:
            raise ValueError(
                f"Unknown category method {self.category_method!r}. "
                f"Must be one of {CATEGORY_METHODS}."
            )

        if self.weight_tolerance <= 0:
            raise ValueError("Weight tolerance must be positive.")
