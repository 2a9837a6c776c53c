"""
Exceptions raised by the credentials helper.

Errors coming from collaborators (botocore, the filesystem) are not wrapped;
they propagate to the caller unchanged.
"""

class CredentialsHelperError(Exception):
    """Base class for all errors raised by this package."""


class MissingCredentials(CredentialsHelperError):
    """A credential triple is missing its key id, secret or session token."""

    def __init__(self, message: str = "Can't export credentials to config, missing credentials"):
        super().__init__(message)


class IdentityMismatch(CredentialsHelperError):
    """The caller identity does not use the expected access key id."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Credentials loaded by the SDK do not match the expected access key ID: "
            f"expected {expected}, got {actual}"
        )


class RoleChainingExpected(CredentialsHelperError):
    """Role chaining was requested but the identity is not a chained session."""

    def __init__(self, arn: str):
        self.arn = arn
        super().__init__(f"Expected a role-chained session but the caller identity is {arn}")


class InvalidProfileName(CredentialsHelperError, ValueError):
    """The profile name cannot be written as a section header."""


class CredentialsLoadError(CredentialsHelperError):
    """No credentials could be resolved for the identity lookup."""
