"""
CI credentials helper.

Validates temporary AWS credentials against the expected identity and
persists them as named profiles in the shared credentials file.
"""

from .errors import (
    CredentialsHelperError,
    MissingCredentials,
    IdentityMismatch,
    RoleChainingExpected,
    InvalidProfileName,
    CredentialsLoadError,
)
from .models import Credentials, Identity

__version__ = "0.1.0"

__all__ = [
    'CredentialsHelperError',
    'MissingCredentials',
    'IdentityMismatch',
    'RoleChainingExpected',
    'InvalidProfileName',
    'CredentialsLoadError',
    'Credentials',
    'Identity',
]
