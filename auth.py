"""Resolves the GitHub access token used for publication."""

import os
from typing import Mapping, Optional

import config
from utils.logger import get_logger
from utils.error_handler import MissingCredentialError

logger = get_logger()

def get_github_token(explicit_token: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """Gets the GitHub token from the command line or the environment.

    The explicit value wins; otherwise the variable named by
    `config.GITHUB_TOKEN_ENV_VAR` is consulted. This is the only place the
    token is read, so callers pass the result on explicitly.

    Args:
        explicit_token: Value of --github-token, if given.
        environ: Environment mapping to consult. Defaults to os.environ.

    Returns:
        str: The access token.

    Raises:
        MissingCredentialError: If neither source provides a non-empty token.
    """
    if explicit_token and explicit_token.strip():
        logger.debug("Using GitHub token supplied on the command line.")
        return explicit_token.strip()

    env = os.environ if environ is None else environ
    token = (env.get(config.GITHUB_TOKEN_ENV_VAR) or "").strip()
    if token:
        logger.debug(f"Using GitHub token from ${config.GITHUB_TOKEN_ENV_VAR}.")
        return token

    logger.critical("No GitHub token supplied.")
    raise MissingCredentialError(
        f"GitHub token must be provided as --github-token or the {config.GITHUB_TOKEN_ENV_VAR} environment variable."
    )
