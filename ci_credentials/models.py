"""
Value types passed between the identity lookup, the validator and the
credentials file merger.
"""

import os
from typing import Any, Dict, Mapping, Optional

from .config import get_chained_marker

__all__ = ['Credentials', 'Identity']


class Credentials:
    """A temporary AWS credential triple. Any field may be missing."""
    def __init__(self, access_key_id: Optional[str] = None,
                 secret_access_key: Optional[str] = None,
                 session_token: Optional[str] = None):
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token

    @classmethod
    def from_sts_response(cls, data: Mapping[str, Any]) -> "Credentials":
        """Build credentials from the ``Credentials`` member of an STS response."""
        return cls(
            access_key_id=data.get("AccessKeyId"),
            secret_access_key=data.get("SecretAccessKey"),
            session_token=data.get("SessionToken"),
        )

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        """Read credentials from the standard AWS_* environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            access_key_id=environ.get("AWS_ACCESS_KEY_ID"),
            secret_access_key=environ.get("AWS_SECRET_ACCESS_KEY"),
            session_token=environ.get("AWS_SESSION_TOKEN"),
        )

    def is_complete(self) -> bool:
        """Return True if all three fields are present and non-empty."""
        return bool(self.access_key_id and self.secret_access_key and self.session_token)

    def to_env_dict(self) -> Dict[str, str]:
        """
        Convert credentials to a dictionary of environment variables.

        Returns:
            Dict[str, str]: AWS environment variables for the fields that are set
        """
        env = {}
        if self.access_key_id:
            env["AWS_ACCESS_KEY_ID"] = self.access_key_id
        if self.secret_access_key:
            env["AWS_SECRET_ACCESS_KEY"] = self.secret_access_key
        if self.session_token:
            env["AWS_SESSION_TOKEN"] = self.session_token
        return env

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Credentials):
            return NotImplemented
        return (self.access_key_id, self.secret_access_key, self.session_token) == (
            other.access_key_id, other.secret_access_key, other.session_token)

    def __repr__(self) -> str:
        # Never print the secret or the token
        return f"Credentials(access_key_id={self.access_key_id!r})"


class Identity:
    """The caller identity reported by STS for a set of credentials."""
    def __init__(self, access_key_id: str, arn: str,
                 account: Optional[str] = None, user_id: Optional[str] = None):
        self.access_key_id = access_key_id
        self.arn = arn
        self.account = account
        self.user_id = user_id

    @property
    def resource(self) -> str:
        """The resource part of the ARN, e.g. ``assumed-role/ROLE/SESSION``."""
        parts = self.arn.split(":", 5)
        return parts[5] if len(parts) == 6 else ""

    @property
    def principal_type(self) -> Optional[str]:
        """Classify the principal as "role", "api_key", "federated" or "root"."""
        resource = self.resource
        if resource.startswith("assumed-role/"):
            return "role"
        if resource.startswith("user/"):
            return "api_key"
        if resource.startswith("federated-user/"):
            return "federated"
        if resource == "root":
            return "root"
        return None

    @property
    def session_name(self) -> Optional[str]:
        """Session name of an assumed-role identity, None for other principals."""
        if self.principal_type != "role":
            return None
        # Format: assumed-role/ROLE/SESSION
        parts = self.resource.split("/")
        if len(parts) < 3:
            return None
        return "/".join(parts[2:])

    def is_role_chained(self, marker: Optional[str] = None) -> bool:
        """
        Check whether this identity is a chained role session.

        Args:
            marker: Session-name marker of chained sessions (defaults to the
                configured marker)

        Returns:
            True if the identity is an assumed role whose session name
            carries the marker
        """
        marker = marker or get_chained_marker()
        session_name = self.session_name
        if not session_name:
            return False
        return marker.lower() in session_name.lower()

    def __str__(self) -> str:
        account_str = f" - Account: {self.account}" if self.account else ""
        return f"{self.arn}{account_str}"

    def __repr__(self) -> str:
        return f"Identity(access_key_id={self.access_key_id!r}, arn={self.arn!r})"
