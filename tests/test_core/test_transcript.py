import numpy as np
import pandas as pd
import pytest  # pyright: ignore

from coursegrade import (
    CourseGradeResult,
    GPAResult,
    GradePointMapper,
    NoGPA,
    TranscriptBuilder,
    TranscriptEntry,
    semester_sort_key,
)


def entry(code, grade, credits=3, semester="Fall 2024", name=None):
    return TranscriptEntry(
        course_code=code,
        course_name=name or code,
        credits=credits,
        final_grade=grade,
        semester=semester,
    )


# gpa ==================================================================================


def test_gpa_is_credit_weighted():
    # given
    entries = [entry("CS101", "A", credits=3), entry("MA201", "B-", credits=4)]

    # when
    gpa = TranscriptBuilder().gpa(entries)

    # then
    # (3 * 4.0 + 4 * 2.7) / 7
    assert gpa == pytest.approx(3.257, abs=1e-3)


def test_zero_credit_courses_do_not_count_toward_gpa():
    entries = [entry("CS101", "A", credits=3), entry("PE100", "F", credits=0)]

    assert TranscriptBuilder().gpa(entries) == pytest.approx(4.0)


def test_gpa_of_empty_transcript_is_none():
    assert TranscriptBuilder().gpa([]) is None


def test_gpa_of_only_zero_credit_courses_is_none():
    assert TranscriptBuilder().gpa([entry("PE100", "A", credits=0)]) is None


def test_unrecognized_letters_count_as_zero_grade_points():
    entries = [entry("CS101", "A", credits=2), entry("CS102", "P", credits=2)]

    assert TranscriptBuilder().gpa(entries) == pytest.approx(2.0)


def test_strict_mapper_rejects_unrecognized_letters():
    entries = [entry("CS101", "A"), entry("CS102", "P")]

    with pytest.raises(ValueError):
        TranscriptBuilder(GradePointMapper(strict=True)).gpa(entries)


def test_order_of_entries_has_no_effect():
    # given
    entries = [
        entry("CS101", "A-", credits=3, semester="Fall 2023"),
        entry("MA201", "C+", credits=4, semester="Spring 2024"),
        entry("PH110", "B+", credits=5, semester="Fall 2024"),
        entry("EN105", "D", credits=1, semester="Spring 2024"),
    ]
    builder = TranscriptBuilder()

    # when
    forward = builder.gpa(entries)
    backward = builder.gpa(list(reversed(entries)))

    # then
    assert forward == backward


def test_duplicate_course_and_semester_raises():
    entries = [entry("CS101", "A"), entry("CS101", "B")]

    with pytest.raises(ValueError):
        TranscriptBuilder().gpa(entries)


def test_same_course_in_different_semesters_is_allowed():
    entries = [
        entry("CS101", "F", semester="Fall 2023"),
        entry("CS101", "A", semester="Spring 2024"),
    ]

    assert TranscriptBuilder().gpa(entries) == pytest.approx(2.0)


# entries ==============================================================================


def test_negative_credits_raise():
    with pytest.raises(ValueError):
        entry("CS101", "A", credits=-1)


def test_entry_grade_points():
    assert entry("CS101", "B+").grade_points() == 3.3
    assert entry("CS101", "D-").grade_points() == 0.0


def test_entry_from_course_grade():
    # given
    result = CourseGradeResult(
        student_id="S1",
        course_id="c-1",
        assignments_pct=90.0,
        quizzes_pct=None,
        exams_pct=70.0,
        final_percentage=80.0,
        letter_grade="B-",
    )

    # when
    new = TranscriptEntry.from_course_grade(
        result, "CS101", "Intro to Programming", 3, "Fall 2024"
    )

    # then
    assert new == TranscriptEntry(
        "CS101", "Intro to Programming", 3, "B-", "Fall 2024"
    )
    assert new.key == ("CS101", "Fall 2024")


# build ================================================================================


def test_build_returns_gpa_result_with_counted_credits():
    entries = [
        entry("CS101", "A", credits=3),
        entry("MA201", "B", credits=4),
        entry("PE100", "A", credits=0),
    ]

    result = TranscriptBuilder().build("S1", entries)

    assert isinstance(result, GPAResult)
    assert result.student_id == "S1"
    assert result.credits == 7
    assert result.gpa == pytest.approx((3 * 4.0 + 4 * 3.0) / 7)


def test_build_with_no_credit_is_no_gpa():
    assert TranscriptBuilder().build("S1", []) == NoGPA(student_id="S1")


# table and helpers ====================================================================


def test_table_is_sorted_most_recent_semester_first():
    # given
    entries = [
        entry("MA201", "B", semester="Fall 2023"),
        entry("CS101", "A", semester="Spring 2024"),
        entry("PH110", "C", semester="Fall 2024"),
        entry("CS102", "A-", semester="Spring 2024"),
    ]

    # when
    table = TranscriptBuilder().table(entries)

    # then
    assert list(table["course_code"]) == ["PH110", "CS101", "CS102", "MA201"]
    assert list(table["grade_points"]) == [2.0, 4.0, 3.7, 3.0]


def test_table_of_empty_transcript_has_columns():
    table = TranscriptBuilder().table([])

    assert table.empty
    assert list(table.columns) == [
        "course_code",
        "course_name",
        "credits",
        "final_grade",
        "semester",
        "grade_points",
    ]


def test_total_credits_includes_zero_credit_courses():
    entries = [
        entry("CS101", "A", credits=3),
        entry("PE100", "A", credits=0),
        entry("MA201", "F", credits=4),
    ]

    assert TranscriptBuilder().total_credits(entries) == 7


def test_semester_gpa():
    # given
    entries = [
        entry("CS101", "A", credits=3, semester="Fall 2023"),
        entry("MA201", "C", credits=3, semester="Fall 2023"),
        entry("PH110", "B", credits=4, semester="Spring 2024"),
        entry("PE100", "A", credits=0, semester="Summer 2024"),
    ]

    # when
    result = TranscriptBuilder().semester_gpa(entries)

    # then
    expected = pd.Series(
        [np.nan, 3.0, 3.0],
        index=["Summer 2024", "Spring 2024", "Fall 2023"],
        name="gpa",
    )
    pd.testing.assert_series_equal(result, expected)


def test_semester_sort_key_orders_chronologically():
    semesters = ["Fall 2024", "Spring 2024", "Winter 2025", "Summer 2023", "Fall 2023"]

    assert sorted(semesters, key=semester_sort_key) == [
        "Summer 2023",
        "Fall 2023",
        "Spring 2024",
        "Fall 2024",
        "Winter 2025",
    ]


def test_semester_sort_key_puts_unparseable_semesters_last():
    semesters = ["Transfer", "Fall 2024", "Spring 2020"]

    assert sorted(semesters, key=semester_sort_key) == [
        "Spring 2020",
        "Fall 2024",
        "Transfer",
    ]
