"""
Configuration for the credentials helper.

Paths follow the AWS CLI conventions and the retry settings can be tuned
through environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_MAX_ATTEMPTS = 12
DEFAULT_BASE_DELAY = 0.05
DEFAULT_CHAINED_MARKER = "chained"
SESSION_TAG_MAX_LENGTH = 256


@dataclass(frozen=True)
class RetryConfig:
    """Backoff settings for retried calls."""
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BASE_DELAY
    max_delay: Optional[float] = None
    jitter: bool = True


def get_aws_config_dir() -> Path:
    """Get the path to the AWS configuration directory."""
    return Path.home() / ".aws"


def get_aws_credentials_path() -> Path:
    """
    Get the path to the AWS shared credentials file.

    AWS_SHARED_CREDENTIALS_FILE takes precedence over ~/.aws/credentials,
    matching the AWS CLI.
    """
    override = os.environ.get("AWS_SHARED_CREDENTIALS_FILE")
    if override:
        return Path(override).expanduser()
    return get_aws_config_dir() / "credentials"


def get_chained_marker(environ: Optional[Mapping[str, str]] = None) -> str:
    """Get the session-name marker that identifies a role-chained session."""
    environ = os.environ if environ is None else environ
    return environ.get("CI_CREDENTIALS_CHAINED_MARKER") or DEFAULT_CHAINED_MARKER


def load_retry_config(environ: Optional[Mapping[str, str]] = None) -> RetryConfig:
    """
    Load retry settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        RetryConfig with defaults for anything unset

    Raises:
        ValueError: If a variable is set but cannot be parsed
    """
    environ = os.environ if environ is None else environ

    max_attempts = int(environ.get("CI_CREDENTIALS_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))
    if max_attempts < 1:
        raise ValueError("CI_CREDENTIALS_MAX_ATTEMPTS must be at least 1")

    max_delay = environ.get("CI_CREDENTIALS_MAX_DELAY")

    return RetryConfig(
        max_attempts=max_attempts,
        base_delay=float(environ.get("CI_CREDENTIALS_BASE_DELAY", DEFAULT_BASE_DELAY)),
        max_delay=float(max_delay) if max_delay not in (None, "") else None,
    )
