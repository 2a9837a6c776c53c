"""
GitHub Actions environment plumbing.

Exports credentials and outputs to later workflow steps through the
``GITHUB_ENV`` and ``GITHUB_OUTPUT`` files, and masks secret values in the
job log using workflow commands.
"""

import os
from typing import Dict, Mapping, Optional

from ..config import SESSION_TAG_MAX_LENGTH
from ..models import Credentials, Identity
from .sanitize import sanitize

GITHUB_CONTEXT_VARIABLES = {
    "actor": "GITHUB_ACTOR",
    "workflow": "GITHUB_WORKFLOW",
    "repository": "GITHUB_REPOSITORY",
    "commit": "GITHUB_SHA",
}


def mask_value(value: str) -> None:
    """Ask the runner to mask a value in the job log."""
    print(f"::add-mask::{value}")


def _append_to_file(path: str, name: str, value: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def export_variable(name: str, value: str) -> None:
    """
    Set an environment variable for this process and for later workflow steps.

    Args:
        name: Variable name
        value: Variable value (single line)
    """
    os.environ[name] = value
    env_file = os.environ.get("GITHUB_ENV")
    if env_file:
        _append_to_file(env_file, name, value)


def set_output(name: str, value: str) -> None:
    """Set a step output; no-op outside of GitHub Actions."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        _append_to_file(output_file, name, value)


def export_credentials(credentials: Credentials) -> None:
    """Mask and export the credentials as AWS_* environment variables."""
    for name, value in credentials.to_env_dict().items():
        mask_value(value)
        export_variable(name, value)


def export_account_id(identity: Identity) -> Optional[str]:
    """Mask the account id of an identity and publish it as ``aws-account-id``."""
    if not identity.account:
        return None
    mask_value(identity.account)
    set_output("aws-account-id", identity.account)
    return identity.account


def github_context(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Collect sanitized GitHub context values for use in identifiers and log lines.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Dict[str, str]: Sanitized values keyed by "actor", "workflow",
        "repository" and "commit"; unset variables are omitted
    """
    environ = os.environ if environ is None else environ
    context = {}
    for key, variable in GITHUB_CONTEXT_VARIABLES.items():
        value = environ.get(variable)
        if value:
            context[key] = sanitize(value, max_length=SESSION_TAG_MAX_LENGTH)
    return context
