"""Reducing the graded items in one category to a single percentage."""

from __future__ import annotations

import typing

import numpy as np
import pandas as pd

from ._options import CATEGORY_METHODS
from ._records import Category, CategoryScore, ScoreRecord


def _records_to_table(records: typing.Iterable[ScoreRecord]) -> pd.DataFrame:
    """One row per record, with columns `earned` and `possible`. Ungraded is NaN."""
    rows = [
        (r.points_earned if r.is_graded else np.nan, r.points_possible) for r in records
    ]
    return pd.DataFrame(rows, columns=["earned", "possible"], dtype=float)


class CategoryAggregator:
    """Combines a student's score records in one category into a percentage.

    Ungraded records are left out entirely; they do not count as zero. If no
    record is graded, the category has no percentage and must be left out of
    the course grade rather than counted as zero.

    The order of the records has no effect on the result.

    Parameters
    ----------
    method : str
        ``"mean"`` (the default) takes the arithmetic mean of the percentage of
        each graded record. ``"total"`` takes the total points earned over the
        total points possible of the graded records.

    """

    def __init__(self, method: str = "mean"):
        if method not in CATEGORY_METHODS:
            raise ValueError(
                f"Unknown category method {method!r}. Must be one of {CATEGORY_METHODS}."
            )
        self.method = method

    def __repr__(self):
        return f"CategoryAggregator(method={self.method!r})"

    def percentage(self, records: typing.Iterable[ScoreRecord]) -> typing.Optional[float]:
        """The category percentage, or `None` if no record is graded."""
        table = _records_to_table(records).dropna()

        if table.empty:
            return None

        if self.method == "total":
            earned = table["earned"].clip(lower=0).sort_values().sum()
            possible = table["possible"].sort_values().sum()
            return float(earned / possible * 100)

        percentages = (table["earned"] / table["possible"] * 100).clip(lower=0)
        return float(percentages.sort_values().mean())

    def aggregate(
        self, category: Category, records: typing.Iterable[ScoreRecord]
    ) -> CategoryScore:
        """Summarize the records of one category.

        Parameters
        ----------
        category : Category
            The category the records belong to.
        records : Iterable[ScoreRecord]
            The student's records in that category, for one course.

        Returns
        -------
        CategoryScore
            The percentage (or `None`) and the number of graded records.

        """
        records = list(records)
        return CategoryScore(
            category=category,
            percentage=self.percentage(records),
            item_count=sum(1 for r in records if r.is_graded),
        )
