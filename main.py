"""Main execution script for the Student Report Card Publisher."""

import argparse
import os
import sys
from typing import List, Mapping, Optional

from dotenv import load_dotenv

import config
from utils.logger import setup_logger
from utils.error_handler import (GradeQueryError, InputError, LocalArtifactError, PublishError, RenderError)
import auth
from core.grading import GradeEngine, LocalGradeEngine
from core.models import PublicationTarget
from core.pipeline import ReportCardPipeline
from core.publisher import Publisher
from core.renderer import ReportCardRenderer
from services.github_api import GitHubService
from services.grade_query_api import RemoteGradeEngine
import ui.cli as cli

# Initialize logger as early as possible after config is loaded
logger = setup_logger()

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_INPUT = 2
EXIT_GRADE_QUERY = 3
EXIT_RENDER = 4
EXIT_PUBLISH = 5
EXIT_INTERRUPTED = 130

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-card",
        description="Generate a student report card PDF and upload it to a GitHub repository.",
    )
    parser.add_argument("-n", "--name", required=True, help="Student name")
    parser.add_argument("-t", "--total-marks", type=int, required=True, help="Total marks obtained")
    parser.add_argument("-s", "--num-subjects", type=int, required=True, help="Number of subjects")
    parser.add_argument(
        "--total-max-marks", type=int, default=None,
        help=f"Maximum obtainable marks (default: {config.MARKS_PER_SUBJECT} per subject)",
    )
    parser.add_argument("--github-repo", required=True, help="GitHub repository, e.g. username/repo")
    parser.add_argument(
        "--github-path", default=config.DEFAULT_PATH_PREFIX,
        help=f"Path in the repository to upload the PDF to (default: {config.DEFAULT_PATH_PREFIX})",
    )
    parser.add_argument(
        "--github-token", default=None,
        help=f"GitHub token (or set the {config.GITHUB_TOKEN_ENV_VAR} environment variable)",
    )
    parser.add_argument("--branch", default=config.DEFAULT_BRANCH, help="Branch to commit to")
    parser.add_argument("--output-dir", default=".", help="Directory for the local PDF copy")
    parser.add_argument(
        "--font-dir", action="append", default=[],
        help="Additional directory to search for fonts (may be repeated)",
    )
    parser.add_argument(
        "--grade-query-url", default=None,
        help=f"Remote grade query endpoint (or set {config.GRADE_QUERY_URL_ENV_VAR}); graded locally if unset",
    )
    return parser

def validate_marks(args: argparse.Namespace) -> int:
    """Checks the numeric arguments and returns the effective maximum marks.

    Raises:
        InputError: If any value is out of range.
    """
    if not args.name.strip():
        raise InputError("Student name must not be empty.")
    if args.total_marks < 0:
        raise InputError(f"Total marks must be non-negative, got {args.total_marks}.")
    if args.num_subjects < 1:
        raise InputError(f"Number of subjects must be at least 1, got {args.num_subjects}.")
    if args.total_max_marks is None:
        return args.num_subjects * config.MARKS_PER_SUBJECT
    if args.total_max_marks < 0:
        raise InputError(f"Total maximum marks must be non-negative, got {args.total_max_marks}.")
    return args.total_max_marks

def select_grade_engine(query_url: Optional[str]) -> GradeEngine:
    if query_url:
        logger.info(f"Grading remotely via {query_url}")
        return RemoteGradeEngine(query_url)
    logger.info("Grading locally.")
    return LocalGradeEngine()

def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """Runs the report card workflow and returns the process exit status."""
    args = build_parser().parse_args(argv)
    env = os.environ if environ is None else environ
    logger.info("Starting report card workflow.")
    cli.display_welcome()

    local_path = None
    success = False
    try:
        # --- Step 1: Validate Input ---
        cli.display_step(1, "Validating input...")
        total_max_marks = validate_marks(args)
        target = PublicationTarget.from_repo_string(args.github_repo, args.github_path, args.branch)
        token = auth.get_github_token(args.github_token, env)
        cli.display_success(f"Publishing to {target.slug}@{target.branch}.")

        renderer = ReportCardRenderer(font_dirs=args.font_dir + list(config.FONT_DIRS))
        publisher = Publisher(GitHubService(token))
        grade_engine = select_grade_engine(args.grade_query_url or env.get(config.GRADE_QUERY_URL_ENV_VAR))
        pipeline = ReportCardPipeline(grade_engine, renderer, publisher, output_dir=args.output_dir)

        # --- Step 2: Compute Grade ---
        cli.display_step(2, "Computing grade...")
        report = pipeline.grade(args.name.strip(), args.total_marks, total_max_marks, args.num_subjects)
        cli.display_report_card(report)

        # --- Step 3: Render PDF ---
        cli.display_step(3, "Rendering PDF...")
        local_path = pipeline.render_to_disk(report)
        cli.display_success(f"PDF generated: {local_path}")

        # --- Step 4: Publish ---
        cli.display_step(4, "Uploading to GitHub...")
        result = pipeline.publish_from_disk(local_path, report, target)
        cli.display_publication(target, result)
        success = True

    except InputError as e:
        logger.critical(f"Input error: {e}")
        cli.display_error("Input", str(e))
        return EXIT_INPUT
    except GradeQueryError as e:
        logger.error(f"Grade query error: {e}", exc_info=config.DEBUG)
        cli.display_error("Grading", str(e))
        return EXIT_GRADE_QUERY
    except LocalArtifactError as e:
        cli.display_error("Saving", str(e))
        return EXIT_RENDER
    except RenderError as e:
        logger.error(f"Render error: {e}", exc_info=config.DEBUG)
        cli.display_error("Rendering", str(e))
        return EXIT_RENDER
    except PublishError as e:
        logger.error(f"Publish error: {e}", exc_info=config.DEBUG)
        cli.display_error("Publishing", str(e))
        if local_path:
            cli.display_warning(f"The PDF is still available locally at {local_path}.")
        return EXIT_PUBLISH
    except KeyboardInterrupt:
        logger.info("Operation interrupted by user (Ctrl+C).")
        cli.display_warning("Operation interrupted.")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        cli.display_error("Unexpected", f"{e}. Check logs for details.")
        return EXIT_UNEXPECTED
    finally:
        cli.display_farewell(success)

    return EXIT_OK

def run():
    """Console script entry point."""
    load_dotenv()
    sys.exit(main())

if __name__ == "__main__":
    run()
