"""Renders a ReportCard to a single-page PDF using ReportLab."""

import io
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError
from reportlab.pdfgen import canvas

import config
from core.models import RenderedDocument, ReportCard
from utils.error_handler import FontUnavailableError, LayoutFailureError
from utils.logger import get_logger

logger = get_logger()

PAGE_WIDTH_PT, PAGE_HEIGHT_PT = A4
MARGIN_PT = 10 * mm
TITLE_FONT_SIZE = 16
BODY_FONT_SIZE = 12
LINE_SPACING = 1.5


@dataclass(frozen=True)
class FontCandidate:
    family: str
    regular_file: str
    bold_file: str


@dataclass(frozen=True)
class ResolvedFont:
    """Registered ReportLab font names for one family."""

    family: str
    regular: str
    bold: str


def find_font_file(file_name: str, font_dirs: Iterable[str]) -> Optional[str]:
    """Searches each directory recursively for a file, returning the first match.

    Directories are walked in sorted order so the same file wins on every run.
    """
    for font_dir in font_dirs:
        if not os.path.isdir(font_dir):
            continue
        for root, dirs, files in os.walk(font_dir):
            dirs.sort()
            if file_name in files:
                return os.path.join(root, file_name)
    return None


def resolve_font(candidates: Sequence[FontCandidate], font_dirs: Sequence[str]) -> ResolvedFont:
    """Registers the first candidate family whose regular and bold files are both usable.

    Args:
        candidates: Families to try, in order of preference.
        font_dirs: Directories searched for the TrueType files.

    Returns:
        ResolvedFont: The registered font names.

    Raises:
        FontUnavailableError: If every candidate is missing or unreadable.
    """
    for candidate in candidates:
        regular_path = find_font_file(candidate.regular_file, font_dirs)
        bold_path = find_font_file(candidate.bold_file, font_dirs)
        if not regular_path or not bold_path:
            logger.debug(f"Font family {candidate.family} not found in {list(font_dirs)}")
            continue
        bold_name = f"{candidate.family}-Bold"
        try:
            pdfmetrics.registerFont(TTFont(candidate.family, regular_path))
            pdfmetrics.registerFont(TTFont(bold_name, bold_path))
        except (TTFError, OSError) as e:
            logger.warning(f"Font family {candidate.family} could not be loaded: {e}")
            continue
        logger.debug(f"Using font family {candidate.family} ({regular_path}, {bold_path})")
        return ResolvedFont(family=candidate.family, regular=candidate.family, bold=bold_name)

    families = ", ".join(c.family for c in candidates) or "(none configured)"
    raise FontUnavailableError(f"No usable font found. Tried: {families}")


def report_lines(report: ReportCard) -> List[str]:
    """The labeled body lines, in the order they appear on the page."""
    return [
        f"Name: {report.name}",
        f"Total Marks: {report.total_marks}",
        f"Number of Subjects: {report.num_subjects}",
        f"Average: {report.average:.2f}",
        f"Grade: {report.grade}",
    ]


def _default_candidates() -> List[FontCandidate]:
    return [FontCandidate(*entry) for entry in config.FONT_CANDIDATES]


class ReportCardRenderer:
    """Produces the PDF bytes for a report card. Writes nothing to disk."""

    def __init__(
        self,
        font_candidates: Optional[Sequence[FontCandidate]] = None,
        font_dirs: Optional[Sequence[str]] = None,
        title: str = config.DOCUMENT_TITLE,
    ):
        self.font_candidates = list(font_candidates) if font_candidates is not None else _default_candidates()
        self.font_dirs = list(font_dirs) if font_dirs is not None else list(config.FONT_DIRS)
        self.title = title

    def render(self, report: ReportCard) -> RenderedDocument:
        """Renders the report card.

        Output is byte-identical for identical input and font availability:
        the document is written in ReportLab's invariant mode, so no creation
        date or random document id is embedded.

        Raises:
            FontUnavailableError: If no configured font family can be located.
            LayoutFailureError: If the layout engine fails or the content
                does not fit on a single page.
        """
        font = resolve_font(self.font_candidates, self.font_dirs)
        buffer = io.BytesIO()
        try:
            c = canvas.Canvas(buffer, pagesize=A4, invariant=1)
            c.setTitle(self.title)
            self._draw_page(c, font, report)
            c.showPage()
            c.save()
        except LayoutFailureError:
            raise
        except Exception as e:
            logger.error(f"PDF layout failed for '{report.name}': {e}", exc_info=config.DEBUG)
            raise LayoutFailureError(f"PDF layout failed: {e}") from e

        content = buffer.getvalue()
        logger.info(f"Rendered report card for '{report.name}' ({len(content)} bytes, font {font.family})")
        return RenderedDocument(title=self.title, content=content)

    def _draw_page(self, c: canvas.Canvas, font: ResolvedFont, report: ReportCard) -> None:
        printable_width = PAGE_WIDTH_PT - 2 * MARGIN_PT
        body_leading = BODY_FONT_SIZE * LINE_SPACING

        y = PAGE_HEIGHT_PT - MARGIN_PT - TITLE_FONT_SIZE
        c.setFont(font.bold, TITLE_FONT_SIZE)
        c.drawCentredString(PAGE_WIDTH_PT / 2, y, self.title)
        # Title line plus one blank line
        y -= TITLE_FONT_SIZE * LINE_SPACING + body_leading

        c.setFont(font.regular, BODY_FONT_SIZE)
        for x, text in self._layout_body(report, font, printable_width):
            if y < MARGIN_PT:
                raise LayoutFailureError("Report card content does not fit on a single page.")
            c.drawString(x, y, text)
            y -= body_leading

    def _layout_body(self, report: ReportCard, font: ResolvedFont, width: float) -> List[Tuple[float, str]]:
        placed: List[Tuple[float, str]] = []
        for line in report_lines(report):
            # Long values wrap onto continuation lines at the left margin
            for segment in simpleSplit(line, font.regular, BODY_FONT_SIZE, width) or [""]:
                placed.append((MARGIN_PT, segment))
        return placed
