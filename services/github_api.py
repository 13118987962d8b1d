"""Wrapper for the GitHub REST API (git refs and repository contents)."""

from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

import config
from api_clients import build_github_session
from utils.logger import get_logger
from utils.error_handler import (BranchNotFoundError, ForbiddenError, NotFoundError,
                                 PublishError, StaleUpdateError, TransportError)

logger = get_logger()

class GitHubService:
    """Provides the three repository calls the publisher needs.

    Every call is a single attempt bounded by `timeout`; failures surface
    as PublishError subclasses and are never retried here.
    """

    SERVICE_NAME = 'github'

    def __init__(
        self,
        token: str,
        api_url: str = config.GITHUB_API_URL,
        timeout: float = config.HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """Initializes the GitHubService.

        Args:
            token: GitHub access token, resolved by auth.get_github_token().
            api_url: Base URL of the REST API.
            timeout: Seconds before a request is abandoned.
            session: Optional pre-built session (tests inject a fake one).

        Raises:
            MissingCredentialError: If the token is empty.
        """
        logger.debug("Initializing GitHubService...")
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = build_github_session(token, session)
        logger.debug("GitHubService initialized successfully.")

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.api_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.error(f"{method} {url} timed out after {self.timeout}s", exc_info=config.DEBUG)
            raise TransportError(
                f"GitHub request timed out after {self.timeout}s: {method} {path}",
                service=self.SERVICE_NAME
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}", exc_info=config.DEBUG)
            raise TransportError(f"GitHub request failed: {e}", service=self.SERVICE_NAME) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text

    def _check_response(self, response: requests.Response, action: str) -> None:
        """Maps a non-2xx response to the PublishError taxonomy."""
        status = response.status_code
        if 200 <= status < 300:
            return
        message = self._error_message(response)
        logger.error(f"GitHub {action} failed: {status} {message}")
        if status == 401:
            raise TransportError(
                f"Authentication failed while trying to {action}: {message}",
                status_code=status, service=self.SERVICE_NAME
            )
        if status == 403:
            raise ForbiddenError(
                f"Permission denied while trying to {action}: {message}",
                status_code=status, service=self.SERVICE_NAME
            )
        if status == 404:
            raise NotFoundError(
                f"Not found while trying to {action}: {message}",
                status_code=status, service=self.SERVICE_NAME
            )
        if status == 409 or (status == 422 and "sha" in message.lower()):
            raise StaleUpdateError(
                f"Revision token missing or out of date while trying to {action}: {message}",
                status_code=status, service=self.SERVICE_NAME
            )
        raise PublishError(
            f"Failed to {action}: {message}",
            status_code=status, service=self.SERVICE_NAME
        )

    @staticmethod
    def _repo_path(owner: str, repo: str) -> str:
        return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    def get_branch_head(self, owner: str, repo: str, branch: str) -> str:
        """Returns the commit sha at the tip of a branch.

        Raises:
            BranchNotFoundError: If the repository or branch does not exist.
            PublishError: For any other failure.
        """
        path = f"{self._repo_path(owner, repo)}/git/ref/heads/{quote(branch, safe='/')}"
        response = self._request("GET", path)
        if response.status_code == 404:
            raise BranchNotFoundError(
                f"Branch '{branch}' not found in {owner}/{repo}.",
                status_code=404, service=self.SERVICE_NAME
            )
        self._check_response(response, f"resolve branch '{branch}'")
        sha = response.json()["object"]["sha"]
        logger.debug(f"Branch {owner}/{repo}@{branch} is at {sha}")
        return sha

    def get_file_revision(self, owner: str, repo: str, file_path: str, branch: str) -> Optional[str]:
        """Returns the blob sha of a file on a branch, or None if it does not exist.

        Raises:
            PublishError: If the path is a directory or the lookup fails.
        """
        path = f"{self._repo_path(owner, repo)}/contents/{quote(file_path, safe='/')}"
        response = self._request("GET", path, params={"ref": branch})
        if response.status_code == 404:
            logger.debug(f"No existing file at {owner}/{repo}/{file_path}@{branch}")
            return None
        self._check_response(response, f"look up '{file_path}'")
        body = response.json()
        if not isinstance(body, dict) or body.get("type", "file") != "file":
            raise PublishError(
                f"Remote path '{file_path}' exists but is not a file.",
                service=self.SERVICE_NAME
            )
        logger.debug(f"Existing file {file_path} has revision {body['sha']}")
        return body["sha"]

    def put_file(
        self,
        owner: str,
        repo: str,
        file_path: str,
        branch: str,
        encoded_content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Creates or updates a file with a single commit.

        Args:
            encoded_content: Base64 text of the file content.
            message: Commit message.
            sha: Current revision of the file. Required when the file already exists.

        Returns:
            The API response: ``content`` (new blob) and ``commit`` objects.

        Raises:
            StaleUpdateError: If the file exists and `sha` is missing or stale.
            NotFoundError, ForbiddenError, TransportError, PublishError: Per response.
        """
        path = f"{self._repo_path(owner, repo)}/contents/{quote(file_path, safe='/')}"
        payload: Dict[str, Any] = {
            "message": message,
            "content": encoded_content,
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha
        logger.info(f"Uploading {file_path} to {owner}/{repo}@{branch} ({'update' if sha else 'create'})")
        response = self._request("PUT", path, json=payload)
        self._check_response(response, f"write '{file_path}'")
        return response.json()
