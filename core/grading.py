"""Grade derivation: marks to percentage and letter grade."""

from abc import ABC, abstractmethod
from typing import Final, Tuple

from core.models import ReportCard

# Inclusive lower bounds, checked highest first. Anything below the last is FALLBACK_GRADE.
GRADE_THRESHOLDS: Final[Tuple[Tuple[float, str], ...]] = (
    (90.0, "A"),
    (75.0, "B"),
    (60.0, "C"),
)
FALLBACK_GRADE: Final[str] = "D"


def percentage(total_marks: int, total_max_marks: int) -> float:
    """Returns marks as a percentage of the maximum, or 0.0 when the maximum is zero.

    No clamping: marks above the maximum yield more than 100.
    """
    if total_max_marks > 0:
        return total_marks / total_max_marks * 100
    return 0.0


def letter_grade(average: float) -> str:
    for lower_bound, grade in GRADE_THRESHOLDS:
        if average >= lower_bound:
            return grade
    return FALLBACK_GRADE


def compute_report_card(name: str, total_marks: int, total_max_marks: int, num_subjects: int) -> ReportCard:
    """Computes the report card for one student.

    Total and side-effect free: no range validation is performed and no
    exception is raised for any non-negative input.
    """
    average = percentage(total_marks, total_max_marks)
    return ReportCard(
        name=name,
        total_marks=total_marks,
        num_subjects=num_subjects,
        average=average,
        grade=letter_grade(average),
    )


class GradeEngine(ABC):
    """Something that can turn raw marks into a ReportCard."""

    @abstractmethod
    def compute_grade(self, name: str, total_marks: int, total_max_marks: int, num_subjects: int) -> ReportCard:
        raise NotImplementedError


class LocalGradeEngine(GradeEngine):
    """Computes grades in-process."""

    def compute_grade(self, name: str, total_marks: int, total_max_marks: int, num_subjects: int) -> ReportCard:
        return compute_report_card(name, total_marks, total_max_marks, num_subjects)
