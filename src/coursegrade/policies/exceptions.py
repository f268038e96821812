from collections.abc import Sequence
import logging
from typing import Union, Optional

from ..core import Category, Percentage, Points, ScoreRecord
from ..repositories import GradeStore


logger = logging.getLogger(__name__)

# private helpers ======================================================================


def _add_reason_to_message(message, reason):
    if reason is not None:
        message += " Reason: " + reason
    return message


def _existing_record(
    store: GradeStore, student_id: str, course_id: str, category: Category, item: str
) -> ScoreRecord:
    record = store.score_record(student_id, course_id, category, item)
    if record is None:
        raise KeyError(
            f"No {category.value} record for {item!r} for student {student_id!r} "
            f"in course {course_id!r}."
        )
    return record


# public functions and classes =========================================================

# make_exceptions ----------------------------------------------------------------------


def make_exceptions(
    store: GradeStore,
    student_id: str,
    course_id: str,
    exceptions: Sequence[Union["Excuse", "Replace"]],
):
    """Make grading exceptions for an individual student in a course.

    Records are never edited in place: each exception stores a new record that
    replaces the student's record for the item.

    Parameters
    ----------
    store : GradeStore
        The store holding the student's score records. Will be modified.

    student_id : str
        The student to apply the exceptions to.

    course_id : str
        The course the items belong to.

    exceptions : Sequence[Union[Excuse, Replace]]
        The exceptions to apply, in order.

    Raises
    ------
    KeyError
        If the student has no record for an item named by an exception.

    Example
    -------
    .. code:: python

        from coursegrade.policies.exceptions import make_exceptions, Excuse, Replace

        make_exceptions(store, "S1", "CS101", [
            Excuse(Category.ASSIGNMENTS, "hw01", reason="Illness."),
            Replace(Category.EXAMS, "midterm", Percentage(85), reason="Regrade."),
        ])

    """
    for exception in exceptions:
        exception(store, student_id, course_id)


# Excuse -------------------------------------------------------------------------------


class Excuse:
    """Excuse a student from an item. To be used with :func:`make_exceptions`.

    The item's record is replaced by an ungraded one, so it is left out of the
    category average instead of counting as zero.

    Parameters
    ----------
    category : Category
        The category of the item.

    item : str
        The item that will be excused.

    reason: Optional[str]
        An optional reason for the exception.

    """

    def __init__(self, category: Category, item: str, reason: Optional[str] = None):
        self.category = category
        self.item = item
        self.reason = reason

    def __call__(self, store: GradeStore, student_id: str, course_id: str):
        record = _existing_record(store, student_id, course_id, self.category, self.item)
        store.record_score(student_id, course_id, self.category, record.regraded(None))

        msg = f"Exception applied: {self.item} excused for {student_id}."
        logger.info(_add_reason_to_message(msg, self.reason))


# Replace ------------------------------------------------------------------------------


class Replace:
    """Replace a student's score on an item. To be used with :func:`make_exceptions`.

    Parameters
    ----------
    category : Category
        The category of the item.

    item : str
        The item whose score will be replaced.

    with_ : Union[str, Points, Percentage]
        If a string, it will be interpreted as the name of another item in the
        same category, and that item's percentage will be used. If
        :class:`Points`, this overrides the points earned. If
        :class:`Percentage`, the points earned are computed from the item's
        points possible.

    reason: Optional[str]
        An optional reason for the exception.

    """

    def __init__(
        self,
        category: Category,
        item: str,
        with_: Union[str, Points, Percentage],
        reason: Optional[str] = None,
    ):
        self.category = category
        self.item = item
        self.with_ = with_
        self.reason = reason

    def __call__(self, store: GradeStore, student_id: str, course_id: str):
        record = _existing_record(store, student_id, course_id, self.category, self.item)

        if isinstance(self.with_, str):
            other = _existing_record(
                store, student_id, course_id, self.category, self.with_
            )
            amount = Percentage(other.percentage())
            msg = f"Replacing score on {self.item} with score on {self.with_}."
        else:
            # the amount has been explicitly given
            amount = self.with_
            msg = f"Overriding score on {self.item} to be {amount}."

        if amount.amount is None:
            new_record = record.regraded(None)
        else:
            new_record = record.regraded(amount.to_points(record.points_possible))

        store.record_score(student_id, course_id, self.category, new_record)
        logger.info(_add_reason_to_message(msg, self.reason))
