"""Value types passed between the grading, rendering and publishing stages."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import config
from utils.error_handler import InputError

# Whitespace and path separators both collapse to a single underscore
_UNSAFE_RUN = re.compile(r"[\s/\\]+")
# Used when nothing printable is left of the name
FALLBACK_STEM = "student"


@dataclass(frozen=True)
class ReportCard:
    """Grading record for one student. Created once, never re-derived."""

    name: str
    total_marks: int
    num_subjects: int
    average: float
    grade: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "total_marks": self.total_marks,
            "num_subjects": self.num_subjects,
            "average": self.average,
            "grade": self.grade,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportCard":
        """Builds a ReportCard from its wire form.

        Raises:
            KeyError: If a field is missing.
            TypeError, ValueError: If a field cannot be coerced.
        """
        return cls(
            name=str(data["name"]),
            total_marks=int(data["total_marks"]),
            num_subjects=int(data["num_subjects"]),
            average=float(data["average"]),
            grade=str(data["grade"]),
        )


@dataclass(frozen=True)
class RenderedDocument:
    title: str
    content: bytes


@dataclass(frozen=True)
class PublicationTarget:
    """Where a document is written: repository, directory prefix and branch."""

    owner: str
    repository: str
    path_prefix: str = config.DEFAULT_PATH_PREFIX
    branch: str = config.DEFAULT_BRANCH

    @classmethod
    def from_repo_string(
        cls,
        repo: str,
        path_prefix: str = config.DEFAULT_PATH_PREFIX,
        branch: str = config.DEFAULT_BRANCH,
    ) -> "PublicationTarget":
        """Parses an ``owner/repo`` string.

        Raises:
            InputError: If the string is not exactly two non-empty parts.
        """
        parts = repo.strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise InputError(f"Repository must be in 'owner/repo' form, got '{repo}'.")
        if not branch:
            raise InputError("Branch name must not be empty.")
        return cls(owner=parts[0], repository=parts[1], path_prefix=path_prefix, branch=branch)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repository}"


@dataclass(frozen=True)
class PublicationResult:
    """Receipt proving the document now exists remotely."""

    remote_path: str
    branch: str
    commit_reference: str
    revision: Optional[str] = None
    base_commit: Optional[str] = None


def report_file_name(student_name: str) -> str:
    """Returns the PDF file name for a student, e.g. ``Asha_Rao_report_card.pdf``.

    The result is a bare file name: separators are replaced and leading dots
    and underscores dropped, so ``../Asha Rao`` cannot climb out of a directory.
    """
    stem = _UNSAFE_RUN.sub("_", student_name.strip()).lstrip("._") or FALLBACK_STEM
    return stem + config.REPORT_FILE_SUFFIX
