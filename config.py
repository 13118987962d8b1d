"""Configuration settings for the Student Report Card Publisher."""

import os
import logging
from typing import Final, List, Tuple

import reportlab

# Debug flag: 1 = debug mode (verbose logging), 0 = production mode
DEBUG: Final[int] = int(os.environ.get("REPORT_CARD_DEBUG", "0"))

# --- GitHub API Settings ---

GITHUB_API_URL: Final[str] = os.environ.get("GITHUB_API_URL", "https://api.github.com")
GITHUB_API_VERSION: Final[str] = "2022-11-28"
# Name of the environment variable consulted when --github-token is not given
GITHUB_TOKEN_ENV_VAR: Final[str] = "GITHUB_TOKEN"
USER_AGENT: Final[str] = "report-card-publisher"

DEFAULT_BRANCH: Final[str] = "main"
DEFAULT_PATH_PREFIX: Final[str] = "pdfs/"
# Fixed commit message for every upload
COMMIT_MESSAGE: Final[str] = "Add student report card PDF"

# Applies to every outbound HTTP call (grade query and GitHub)
HTTP_TIMEOUT_SECONDS: Final[float] = float(os.environ.get("REPORT_CARD_HTTP_TIMEOUT", "30"))

# --- Grade Query Settings ---

# When this variable (or --grade-query-url) is set, grading is delegated remotely
GRADE_QUERY_URL_ENV_VAR: Final[str] = "GRADE_QUERY_URL"
# Maximum marks per subject, used when --total-max-marks is omitted
MARKS_PER_SUBJECT: Final[int] = 100

# --- Document Settings ---

DOCUMENT_TITLE: Final[str] = "Student Report Card"
REPORT_FILE_SUFFIX: Final[str] = "_report_card.pdf"

# TrueType fonts shipped inside the reportlab distribution
REPORTLAB_FONT_DIR: Final[str] = os.path.join(os.path.dirname(reportlab.__file__), "fonts")

# Directories searched (recursively) for TrueType font files
_default_font_dirs = [
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    os.path.expanduser("~/.fonts"),
    os.path.expanduser("~/.local/share/fonts"),
    REPORTLAB_FONT_DIR,
]
FONT_DIRS: Final[List[str]] = [
    d for d in os.environ.get("REPORT_CARD_FONT_DIRS", "").split(os.pathsep) if d
] or _default_font_dirs

# Ordered candidates: (family, regular file, bold file). First usable one wins.
FONT_CANDIDATES: Final[List[Tuple[str, str, str]]] = [
    ("LiberationSans", "LiberationSans-Regular.ttf", "LiberationSans-Bold.ttf"),
    ("DejaVuSans", "DejaVuSans.ttf", "DejaVuSans-Bold.ttf"),
    ("Vera", "Vera.ttf", "VeraBd.ttf"),
]

# --- File Paths ---
LOG_DIR: Final[str] = os.environ.get("REPORT_CARD_LOG_DIR", "logs")
LOG_FILE: Final[str] = os.environ.get("REPORT_CARD_LOG_FILE", os.path.join(LOG_DIR, "report_card.log"))

# --- Logging Configuration ---
# LOG_LEVEL is used for file logging, console logging is only enabled in DEBUG mode
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
LOGGER_NAME: Final[str] = os.environ.get("REPORT_CARD_LOGGER_NAME", "ReportCardPublisher")
# Structured log format: timestamp, level, logger, module.function:line, message
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'

# Basic check
if __name__ == "__main__":
    print(f"Debug Mode: {'On' if DEBUG else 'Off'}")
    print(f"Log Level: {logging.getLevelName(LOG_LEVEL)}")
    print(f"Log File: {LOG_FILE}")
    print(f"GitHub API: {GITHUB_API_URL} (version {GITHUB_API_VERSION})")
    print(f"GitHub Token Loaded: {'Yes' if os.environ.get(GITHUB_TOKEN_ENV_VAR) else 'No'}")
    print(f"Grade Query URL: {os.environ.get(GRADE_QUERY_URL_ENV_VAR) or '(local grading)'}")
    print(f"HTTP Timeout: {HTTP_TIMEOUT_SECONDS}s")
    print("Font directories:")
    for font_dir in FONT_DIRS:
        print(f"- {font_dir}")
    print("Font candidates:")
    for family, regular, bold in FONT_CANDIDATES:
        print(f"- {family} ({regular}, {bold})")
