"""
Identity lookup and credentials validation.
"""

from .sts import IdentityLookup, StsIdentityLookup
from .validator import CredentialsValidator, validate_credentials, is_retryable_error
