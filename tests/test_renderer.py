"""
Tests for core.renderer

Test Coverage:
- resolve_font(): ordered fallback, partial and broken families, exhaustion
- ReportCardRenderer.render(): page count, text content, determinism
- Failure modes: FontUnavailableError, LayoutFailureError
"""

import fitz  # PyMuPDF
import pytest

from core.models import ReportCard
from core.renderer import FontCandidate, ReportCardRenderer, report_lines, resolve_font
from utils.error_handler import FontUnavailableError, LayoutFailureError, RenderError

VERA = FontCandidate("Vera", "Vera.ttf", "VeraBd.ttf")


def _page_text(content: bytes) -> str:
    with fitz.open(stream=content, filetype="pdf") as doc:
        assert doc.page_count == 1
        return doc[0].get_text()


def test_report_lines_order_and_format(asha_report):
    assert report_lines(asha_report) == [
        "Name: Asha Rao",
        "Total Marks: 450",
        "Number of Subjects: 5",
        "Average: 90.00",
        "Grade: A",
    ]


def test_average_always_has_two_decimals():
    report = ReportCard(name="B", total_marks=2, num_subjects=1, average=2 / 3 * 100, grade="C")

    assert "Average: 66.67" in report_lines(report)


def test_render_produces_single_page_pdf(renderer, asha_report):
    document = renderer.render(asha_report)

    assert document.title == "Student Report Card"
    assert document.content.startswith(b"%PDF")
    text = _page_text(document.content)
    assert "Student Report Card" in text
    for line in report_lines(asha_report):
        assert line in text


def test_render_sets_document_title(renderer, asha_report):
    document = renderer.render(asha_report)

    with fitz.open(stream=document.content, filetype="pdf") as doc:
        assert doc.metadata["title"] == "Student Report Card"


def test_render_is_byte_identical(renderer, asha_report, vera_font_dirs):
    first = renderer.render(asha_report)
    second = renderer.render(asha_report)
    third = ReportCardRenderer(font_candidates=[VERA], font_dirs=vera_font_dirs).render(asha_report)

    assert first.content == second.content == third.content


def test_fallback_family_used_when_primary_missing(vera_font_dirs):
    candidates = [FontCandidate("Missing", "Missing-Regular.ttf", "Missing-Bold.ttf"), VERA]

    font = resolve_font(candidates, vera_font_dirs)

    assert font.family == "Vera"
    assert font.bold == "Vera-Bold"


def test_family_without_bold_file_is_skipped(vera_font_dirs):
    candidates = [FontCandidate("Partial", "Vera.ttf", "Partial-Bold.ttf"), VERA]

    assert resolve_font(candidates, vera_font_dirs).family == "Vera"


def test_unreadable_font_file_is_skipped(tmp_path, vera_font_dirs):
    (tmp_path / "Broken.ttf").write_bytes(b"not a font")
    (tmp_path / "Broken-Bold.ttf").write_bytes(b"not a font either")
    candidates = [FontCandidate("Broken", "Broken.ttf", "Broken-Bold.ttf"), VERA]

    font = resolve_font(candidates, [str(tmp_path)] + vera_font_dirs)

    assert font.family == "Vera"


def test_font_found_in_nested_directory(tmp_path, vera_font_dirs):
    nested = tmp_path / "truetype" / "vera"
    nested.mkdir(parents=True)
    source = vera_font_dirs[0]
    for name in ("Vera.ttf", "VeraBd.ttf"):
        with open(f"{source}/{name}", "rb") as font_file:
            (nested / name).write_bytes(font_file.read())

    assert resolve_font([VERA], [str(tmp_path)]).family == "Vera"


def test_no_usable_font_raises(tmp_path, asha_report):
    renderer = ReportCardRenderer(
        font_candidates=[FontCandidate("LiberationSans", "LiberationSans-Regular.ttf", "LiberationSans-Bold.ttf"),
                         FontCandidate("DejaVuSans", "DejaVuSans.ttf", "DejaVuSans-Bold.ttf")],
        font_dirs=[str(tmp_path)],
    )

    with pytest.raises(FontUnavailableError) as excinfo:
        renderer.render(asha_report)
    assert "LiberationSans" in str(excinfo.value)
    assert "DejaVuSans" in str(excinfo.value)


def test_font_error_is_a_render_error(tmp_path):
    with pytest.raises(RenderError):
        resolve_font([], [str(tmp_path)])


def test_content_too_long_for_one_page(renderer):
    report = ReportCard(name=" ".join(["Longname"] * 3000), total_marks=1, num_subjects=1, average=1.0, grade="D")

    with pytest.raises(LayoutFailureError):
        renderer.render(report)


def test_long_name_wraps_onto_page(renderer):
    report = ReportCard(name=" ".join(["Verylongname"] * 20), total_marks=1, num_subjects=1, average=1.0, grade="D")

    text = _page_text(renderer.render(report).content)

    assert "Grade: D" in text
    assert text.count("Verylongname") == 20


def test_layout_engine_error_is_wrapped(renderer, asha_report, monkeypatch):
    from reportlab.pdfgen import canvas

    def broken_draw(self, *args, **kwargs):
        raise ValueError("glyph table corrupt")

    monkeypatch.setattr(canvas.Canvas, "drawString", broken_draw)

    with pytest.raises(LayoutFailureError) as excinfo:
        renderer.render(asha_report)
    assert "glyph table corrupt" in str(excinfo.value)
