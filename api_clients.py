"""Factory functions for creating HTTP sessions for the remote APIs."""

from typing import Optional

import requests

import config
from utils.logger import get_logger
from utils.error_handler import MissingCredentialError

logger = get_logger()

def build_github_session(token: str, session: Optional[requests.Session] = None) -> requests.Session:
    """Builds a session carrying the GitHub REST headers and bearer token.

    Args:
        token: GitHub access token.
        session: Existing session to configure. A new one is created if omitted.

    Returns:
        requests.Session: The configured session.

    Raises:
        MissingCredentialError: If the token is empty.
    """
    if not token:
        logger.error("Attempted to build GitHub session without a token.")
        raise MissingCredentialError("A GitHub token is required to build the API session.")

    session = session if session is not None else requests.Session()
    session.headers.update({
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": config.GITHUB_API_VERSION,
        "User-Agent": config.USER_AGENT,
    })
    logger.debug(f"Built GitHub session for {config.GITHUB_API_URL}")
    return session

def build_json_session(session: Optional[requests.Session] = None) -> requests.Session:
    """Builds a session for plain JSON endpoints such as the grade query."""
    session = session if session is not None else requests.Session()
    session.headers.update({
        "Accept": "application/json",
        "User-Agent": config.USER_AGENT,
    })
    return session
