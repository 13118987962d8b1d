"""Publishes rendered report cards to a GitHub repository."""

import base64

import config
from core.models import PublicationResult, PublicationTarget
from services.github_api import GitHubService
from utils.logger import get_logger

logger = get_logger()


def normalize_prefix(path_prefix: str) -> str:
    """Returns the prefix without a leading slash and with a trailing one, if non-empty."""
    prefix = path_prefix.strip().lstrip("/")
    if prefix and not prefix.endswith("/"):
        prefix += "/"
    return prefix


def remote_path_for(target: PublicationTarget, file_name: str) -> str:
    return normalize_prefix(target.path_prefix) + file_name


class Publisher:
    """Ensures the remote store holds given content at a target path.

    One publish is one best-effort attempt: branch lookup, revision lookup
    and a single create-or-update commit. Retrying is up to the caller.
    """

    def __init__(self, github_service: GitHubService, commit_message: str = config.COMMIT_MESSAGE):
        self.github = github_service
        self.commit_message = commit_message

    def publish(self, content: bytes, target: PublicationTarget, file_name: str) -> PublicationResult:
        """Creates or overwrites `file_name` under the target prefix.

        When a file already exists at the path its current revision is sent
        along with the write, so the store accepts the overwrite only if
        nothing changed in between.

        Raises:
            BranchNotFoundError: If the target branch does not exist.
            StaleUpdateError: If the file changed between lookup and write.
            PublishError: For transport, permission and other remote failures.
        """
        base_commit = self.github.get_branch_head(target.owner, target.repository, target.branch)

        remote_path = remote_path_for(target, file_name)
        current_revision = self.github.get_file_revision(
            target.owner, target.repository, remote_path, target.branch
        )

        encoded = base64.b64encode(content).decode("ascii")
        response = self.github.put_file(
            target.owner,
            target.repository,
            remote_path,
            target.branch,
            encoded,
            self.commit_message,
            sha=current_revision,
        )

        commit_reference = response["commit"]["sha"]
        revision = (response.get("content") or {}).get("sha")
        logger.info(
            f"Published {remote_path} to {target.slug}@{target.branch} "
            f"(commit {commit_reference}, {'overwrote' if current_revision else 'created'})"
        )
        return PublicationResult(
            remote_path=remote_path,
            branch=target.branch,
            commit_reference=commit_reference,
            revision=revision,
            base_commit=base_commit,
        )
