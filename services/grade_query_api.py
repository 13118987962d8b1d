"""Remote grade engine: delegates grading to a deterministic query endpoint."""

from typing import Any, Dict, Optional

import requests

import config
from api_clients import build_json_session
from core.grading import GradeEngine
from core.models import ReportCard
from utils.logger import get_logger
from utils.error_handler import GradeQueryError

logger = get_logger()

class RemoteGradeEngine(GradeEngine):
    """Computes grades by querying a remote endpoint.

    The endpoint is trusted: the returned record is decoded, not re-checked.
    """

    def __init__(self, query_url: str, timeout: float = config.HTTP_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        if not query_url:
            raise GradeQueryError("A grade query URL is required for remote grading.")
        self.query_url = query_url
        self.timeout = timeout
        self.session = build_json_session(session)
        logger.debug(f"RemoteGradeEngine initialized for {query_url}")

    def compute_grade(self, name: str, total_marks: int, total_max_marks: int, num_subjects: int) -> ReportCard:
        """Queries the remote endpoint for a report card.

        Raises:
            GradeQueryError: On network failure, timeout, a non-2xx status or
                a response body that is not a report card record.
        """
        request_body: Dict[str, Any] = {
            "name": name,
            "total_marks": total_marks,
            "total_max_marks": total_max_marks,
            "num_subjects": num_subjects,
        }
        logger.info(f"Querying remote grade engine at {self.query_url} for '{name}'")
        try:
            response = self.session.post(self.query_url, json=request_body, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"Grade query timed out after {self.timeout}s", exc_info=config.DEBUG)
            raise GradeQueryError(f"Grade query timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Grade query failed: {e}", exc_info=config.DEBUG)
            raise GradeQueryError(f"Grade query failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Grade query returned {response.status_code}: {response.text}")
            raise GradeQueryError(
                f"Grade query returned HTTP {response.status_code}",
                status_code=response.status_code
            )

        try:
            report = ReportCard.from_dict(response.json())
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed grade query response: {e}", exc_info=config.DEBUG)
            raise GradeQueryError(f"Malformed grade query response: {e}") from e

        logger.debug(f"Remote report card: {report}")
        return report
