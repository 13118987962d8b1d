"""Runs one student through grading, rendering, local save and publication."""

import os
from dataclasses import dataclass

import config
from core.grading import GradeEngine
from core.models import PublicationResult, PublicationTarget, RenderedDocument, ReportCard, report_file_name
from core.publisher import Publisher
from core.renderer import ReportCardRenderer
from utils.error_handler import LocalArtifactError
from utils.logger import get_logger

logger = get_logger()


@dataclass(frozen=True)
class PipelineResult:
    report: ReportCard
    local_path: str
    publication: PublicationResult


def save_document(document: RenderedDocument, directory: str, file_name: str) -> str:
    """Writes the rendered bytes to `directory/file_name` and returns the path.

    Raises:
        LocalArtifactError: If the directory or file cannot be written.
    """
    path = os.path.join(directory, file_name)
    try:
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(path, "wb") as pdf_file:
            pdf_file.write(document.content)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}", exc_info=config.DEBUG)
        raise LocalArtifactError(f"Could not save the PDF to {path}: {e}") from e
    logger.info(f"Saved {document.title} to {path}")
    return path


class ReportCardPipeline:
    """Orchestrates the three stages strictly in order.

    Each stage's exception propagates unchanged. The local PDF is written
    before publication starts and is left in place if publication fails.
    """

    def __init__(self, grade_engine: GradeEngine, renderer: ReportCardRenderer, publisher: Publisher,
                 output_dir: str = "."):
        self.grade_engine = grade_engine
        self.renderer = renderer
        self.publisher = publisher
        self.output_dir = output_dir

    def grade(self, name: str, total_marks: int, total_max_marks: int, num_subjects: int) -> ReportCard:
        report = self.grade_engine.compute_grade(name, total_marks, total_max_marks, num_subjects)
        logger.info(f"Report card for '{report.name}': average {report.average:.2f}, grade {report.grade}")
        return report

    def render_to_disk(self, report: ReportCard) -> str:
        document = self.renderer.render(report)
        return save_document(document, self.output_dir, report_file_name(report.name))

    def publish_from_disk(self, local_path: str, report: ReportCard, target: PublicationTarget) -> PublicationResult:
        """Uploads the saved PDF under the file name derived from the student's name."""
        with open(local_path, "rb") as pdf_file:
            content = pdf_file.read()
        return self.publisher.publish(content, target, report_file_name(report.name))

    def run(self, name: str, total_marks: int, total_max_marks: int, num_subjects: int,
            target: PublicationTarget) -> PipelineResult:
        report = self.grade(name, total_marks, total_max_marks, num_subjects)
        local_path = self.render_to_disk(report)
        publication = self.publish_from_disk(local_path, report, target)
        return PipelineResult(report=report, local_path=local_path, publication=publication)
