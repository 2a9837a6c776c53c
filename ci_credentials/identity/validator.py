"""
Credentials validation.

Confirms that a set of credentials belongs to the expected access key and,
when asked, that it is a role-chained session.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from ..config import RetryConfig, get_chained_marker
from ..errors import IdentityMismatch, RoleChainingExpected
from ..models import Identity
from ..utils.retry import RetryPredicate, default_sleep, retry_with_backoff
from .sts import IdentityLookup

__all__ = ['CredentialsValidator', 'validate_credentials', 'is_retryable_error']

logger = logging.getLogger(__name__)

RETRYABLE_ERROR_CODES = frozenset([
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "ServiceUnavailable",
    "InternalFailure",
    "InternalError",
    "RequestTimeout",
])

RETRYABLE_EXCEPTIONS = (
    EndpointConnectionError,
    ConnectionClosedError,
    ReadTimeoutError,
    ConnectTimeoutError,
)


def is_retryable_error(exc: BaseException) -> bool:
    """
    Decide whether a failed identity lookup is worth retrying.

    Throttling, server-side and connection errors are transient; everything
    else (bad credentials, access denied, our own validation errors) is not.
    """
    if isinstance(exc, RETRYABLE_EXCEPTIONS):
        return True
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        if error.get("Code") in RETRYABLE_ERROR_CODES:
            return True
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return status is not None and status >= 500
    return False


class CredentialsValidator:
    """
    Validates credentials through an injected identity lookup.
    """

    def __init__(self, identity_lookup: IdentityLookup,
                 retry_config: Optional[RetryConfig] = None,
                 is_retryable: RetryPredicate = is_retryable_error,
                 sleep: Callable[[float], Awaitable[Any]] = default_sleep,
                 chained_marker: Optional[str] = None):
        """
        Initialize the validator.

        Args:
            identity_lookup: Object with an async get_caller_identity() method
            retry_config: Backoff settings for the lookup
            is_retryable: Predicate (or bool) deciding which lookup errors are retried
            sleep: Coroutine function used between retries
            chained_marker: Session-name marker of role-chained sessions
        """
        self.identity_lookup = identity_lookup
        self.retry_config = retry_config or RetryConfig()
        self.is_retryable = is_retryable
        self.sleep = sleep
        self.chained_marker = chained_marker or get_chained_marker()

    async def lookup_identity(self, timeout: Optional[float] = None) -> Identity:
        """Fetch the caller identity, retrying transient failures."""
        lookup = retry_with_backoff(
            self.identity_lookup.get_caller_identity,
            self.is_retryable,
            config=self.retry_config,
            sleep=self.sleep,
        )
        if timeout is None:
            return await lookup
        return await asyncio.wait_for(lookup, timeout)

    async def validate_credentials(self, expected_access_key_id: Optional[str] = None,
                                   role_chaining: bool = False,
                                   timeout: Optional[float] = None) -> Identity:
        """
        Check the caller identity against expectations.

        Args:
            expected_access_key_id: Access key id the identity must use
            role_chaining: Require a role-chained session
            timeout: Optional overall timeout in seconds for the lookup

        Returns:
            Identity: The identity that passed validation

        Raises:
            IdentityMismatch: If the access key id differs from the expected one
            RoleChainingExpected: If role chaining was required but not observed
        """
        identity = await self.lookup_identity(timeout)

        if expected_access_key_id and identity.access_key_id != expected_access_key_id:
            raise IdentityMismatch(expected_access_key_id, identity.access_key_id)

        # A chained identity is fine when chaining was not requested
        if role_chaining and not identity.is_role_chained(self.chained_marker):
            raise RoleChainingExpected(identity.arn)

        logger.debug("Validated credentials for %s", identity.arn)
        return identity


async def validate_credentials(identity_lookup: IdentityLookup,
                               expected_access_key_id: Optional[str] = None,
                               role_chaining: bool = False,
                               **kwargs: Any) -> Identity:
    """Validate credentials with a one-off CredentialsValidator.

    Extra keyword arguments go to the CredentialsValidator constructor,
    except ``timeout`` which bounds the lookup.
    """
    timeout = kwargs.pop("timeout", None)
    validator = CredentialsValidator(identity_lookup, **kwargs)
    return await validator.validate_credentials(expected_access_key_id, role_chaining, timeout)
