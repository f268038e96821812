import pandas as pd
import pytest  # pyright: ignore

import coursegrade
from coursegrade import Category, GradeWeights


def test_weights_summing_to_100_are_valid():
    assert GradeWeights("CS101", 40, 20, 40).is_valid()


def test_weights_within_tolerance_of_100_are_valid():
    assert GradeWeights("CS101", 33.333, 33.333, 33.333).is_valid()
    assert GradeWeights("CS101", 40, 20, 40.009).is_valid()


def test_weights_outside_tolerance_are_invalid():
    assert not GradeWeights("CS101", 40, 20, 39.98).is_valid()
    assert not GradeWeights("CS101", 40, 20, 40.02).is_valid()
    assert not GradeWeights("CS101", 50, 50, 50).is_valid()


def test_invalid_weights_can_still_be_created():
    # drafts are allowed; they are only rejected at the point of use
    weights = GradeWeights("CS101", 10, 10, 10)

    assert weights.total_weight() == 30


def test_total_weight_is_not_clamped():
    assert GradeWeights("CS101", 100, 100, 100).total_weight() == 300


def test_validate_raises_invalid_weights():
    with pytest.raises(coursegrade.InvalidWeights):
        GradeWeights("CS101", 10, 10, 10).validate()


def test_validate_rejects_weights_outside_0_to_100_even_if_sum_is_100():
    # given
    weights = GradeWeights("CS101", 120, -20, 0)

    # when / then
    assert weights.is_valid()
    with pytest.raises(coursegrade.InvalidWeights):
        weights.validate()


def test_calculator_rejects_negative_weight():
    weights = GradeWeights("CS101", 120, -20, 0)

    with pytest.raises(coursegrade.InvalidWeights):
        coursegrade.CourseGradeCalculator().calculate(weights, assignments=90, quizzes=50)


def test_validate_passes_for_valid_weights():
    GradeWeights("CS101", 25, 25, 50).validate()


def test_custom_tolerance():
    weights = GradeWeights("CS101", 40, 20, 39.5)

    assert not weights.is_valid()
    assert weights.is_valid(tolerance=1)


def test_weight_of_category():
    weights = GradeWeights("CS101", 40, 20, 40)

    assert weights.weight_of(Category.QUIZZES) == 20


def test_as_series_is_indexed_by_category_name():
    # given
    weights = GradeWeights("CS101", 40, 20, 40)

    # when
    series = weights.as_series()

    # then
    expected = pd.Series({"assignments": 40.0, "quizzes": 20.0, "exams": 40.0})
    pd.testing.assert_series_equal(series, expected)
