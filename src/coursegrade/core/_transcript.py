"""Transcripts and grade point averages."""

from __future__ import annotations

import dataclasses
import re
import typing

import numpy as np
import pandas as pd

from ..scales import GradePointMapper
from ._course import CourseGradeResult


# private helper functions =============================================================

_SEASONS = {"winter": 0, "spring": 1, "summer": 2, "fall": 3, "autumn": 3}

_SEMESTER_PATTERN = re.compile(r"^\s*([A-Za-z]+)\s+(\d{4})\s*$")

TABLE_COLUMNS = [
    "course_code",
    "course_name",
    "credits",
    "final_grade",
    "semester",
    "grade_points",
]


def semester_sort_key(semester: str) -> tuple:
    """A key that orders semesters chronologically.

    Semesters of the form "Fall 2024" are ordered by year, then by season
    (Winter, Spring, Summer, Fall). Anything else sorts after them, by name.

    """
    match = _SEMESTER_PATTERN.match(semester or "")
    if match is not None:
        season, year = match.groups()
        if season.lower() in _SEASONS:
            return (0, int(year), _SEASONS[season.lower()], "")
    return (1, 0, 0, semester or "")


def _check_for_duplicate_keys(entries: typing.Sequence["TranscriptEntry"]):
    seen = set()
    for entry in entries:
        if entry.key in seen:
            raise ValueError(
                f"Transcript has more than one entry for {entry.course_code} "
                f"in {entry.semester}."
            )
        seen.add(entry.key)


# public classes =======================================================================


@dataclasses.dataclass(frozen=True)
class TranscriptEntry:
    """A finalized course on a student's transcript.

    Entries are snapshots and are never modified. A regrade produces a new entry
    with the same :attr:`key`, which replaces the old one.

    Attributes
    ----------
    course_code : str
    course_name : str
    credits : int
        Credit hours. Must not be negative. Zero-credit courses appear on the
        transcript but do not count toward the GPA.
    final_grade : str
        The letter grade.
    semester : str

    Raises
    ------
    ValueError
        If `credits` is negative.

    """

    course_code: str
    course_name: str
    credits: int
    final_grade: str
    semester: str

    def __post_init__(self):
        if self.credits < 0:
            raise ValueError(f"Credits cannot be negative, got {self.credits}.")

    @property
    def key(self) -> tuple[str, str]:
        """The (course code, semester) pair identifying the entry."""
        return (self.course_code, self.semester)

    def grade_points(self, mapper: typing.Optional[GradePointMapper] = None) -> float:
        """Grade points for the final grade, on the 4.0 scale."""
        if mapper is None:
            mapper = GradePointMapper()
        return mapper(self.final_grade)

    @classmethod
    def from_course_grade(
        cls,
        result: CourseGradeResult,
        course_code: str,
        course_name: str,
        credits: int,
        semester: str,
    ) -> "TranscriptEntry":
        """Snapshot a computed course grade as a transcript entry."""
        return cls(
            course_code=course_code,
            course_name=course_name,
            credits=credits,
            final_grade=result.letter_grade,
            semester=semester,
        )


@dataclasses.dataclass(frozen=True)
class GPAResult:
    """A student's grade point average.

    Attributes
    ----------
    student_id : str
    gpa : float
        Credit-weighted average of grade points, on the 4.0 scale.
    credits : int
        The credits that counted toward the GPA.

    """

    student_id: str
    gpa: float
    credits: int


@dataclasses.dataclass(frozen=True)
class NoGPA:
    """Result for a student with no credit-bearing transcript entries.

    This is not an error. It is distinct from a GPA of 0.0.

    """

    student_id: str


class TranscriptBuilder:
    """Computes grade point averages from transcript entries.

    The order of the entries has no effect on any result. A transcript must not
    contain two entries with the same course code and semester.

    Parameters
    ----------
    mapper : Optional[GradePointMapper]
        Maps letter grades to grade points. Default: a non-strict
        :class:`GradePointMapper`.

    """

    def __init__(self, mapper: typing.Optional[GradePointMapper] = None):
        self.mapper = mapper if mapper is not None else GradePointMapper()

    def table(self, entries: typing.Iterable[TranscriptEntry]) -> pd.DataFrame:
        """The transcript as a table, most recent semester first.

        Parameters
        ----------
        entries : Iterable[TranscriptEntry]

        Returns
        -------
        pandas.DataFrame
            One row per entry, with columns ``course_code``, ``course_name``,
            ``credits``, ``final_grade``, ``semester`` and ``grade_points``.

        Raises
        ------
        ValueError
            If two entries share a course code and semester.

        """
        entries = list(entries)
        _check_for_duplicate_keys(entries)

        entries.sort(key=lambda e: e.course_code)
        entries.sort(key=lambda e: semester_sort_key(e.semester), reverse=True)

        table = pd.DataFrame(
            [
                (
                    e.course_code,
                    e.course_name,
                    e.credits,
                    e.final_grade,
                    e.semester,
                    e.grade_points(self.mapper),
                )
                for e in entries
            ],
            columns=TABLE_COLUMNS,
        )
        table["credits"] = table["credits"].astype(int)
        table["grade_points"] = table["grade_points"].astype(float)
        return table

    def total_credits(self, entries: typing.Iterable[TranscriptEntry]) -> int:
        """The total credit hours on the transcript, including zero-credit courses."""
        return int(sum(e.credits for e in entries))

    def _weighted_average(self, table: pd.DataFrame) -> typing.Optional[float]:
        counted = table[table["credits"] > 0]
        if counted.empty:
            return None
        return float(np.average(counted["grade_points"], weights=counted["credits"]))

    def gpa(self, entries: typing.Iterable[TranscriptEntry]) -> typing.Optional[float]:
        """The credit-weighted GPA, or `None` if no entry carries credit.

        Raises
        ------
        ValueError
            If two entries share a course code and semester, or, with a strict
            mapper, if a letter grade is not recognized.

        """
        return self._weighted_average(self.table(entries))

    def semester_gpa(self, entries: typing.Iterable[TranscriptEntry]) -> pd.Series:
        """The GPA earned in each semester, most recent first.

        Returns
        -------
        pandas.Series
            Indexed by semester. Semesters in which no entry carries credit are
            `NaN`.

        """
        table = self.table(entries)
        semesters = list(dict.fromkeys(table["semester"]))

        result = pd.Series(
            {
                semester: self._weighted_average(table[table["semester"] == semester])
                for semester in semesters
            },
            index=semesters,
            dtype=float,
            name="gpa",
        )
        return result

    def build(
        self, student_id: str, entries: typing.Iterable[TranscriptEntry]
    ) -> typing.Union[GPAResult, NoGPA]:
        """Compute a student's GPA result.

        Returns
        -------
        Union[GPAResult, NoGPA]
            :class:`NoGPA` if the transcript is empty or carries no credit.

        """
        table = self.table(entries)
        gpa = self._weighted_average(table)
        if gpa is None:
            return NoGPA(student_id=student_id)

        credits = int(table.loc[table["credits"] > 0, "credits"].sum())
        return GPAResult(student_id=student_id, gpa=gpa, credits=credits)
