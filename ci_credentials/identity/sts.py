"""
STS-backed identity lookup.

Wraps a boto3 session and answers "who am I" for the credentials the
session resolves. boto3 is blocking, so calls run in a worker thread.
"""

import asyncio
from typing import Optional, Protocol

import boto3
from botocore.config import Config

from ..errors import CredentialsLoadError
from ..models import Credentials, Identity

__all__ = ['IdentityLookup', 'StsIdentityLookup']


class IdentityLookup(Protocol):
    """Anything that can report the caller identity of a set of credentials."""

    async def get_caller_identity(self) -> Identity:
        ...


class StsIdentityLookup:
    """
    Identity lookup using AWS STS GetCallerIdentity.
    """

    def __init__(self, credentials: Optional[Credentials] = None,
                 profile_name: Optional[str] = None,
                 region: Optional[str] = None,
                 proxy_server: Optional[str] = None):
        """
        Initialize the lookup.

        Args:
            credentials: Explicit credentials to check (default credential chain if None)
            profile_name: AWS profile to load credentials from
            region: Region of the STS endpoint
            proxy_server: Optional HTTP(S) proxy URL
        """
        self.credentials = credentials
        self.profile_name = profile_name
        self.region = region
        self.proxy_server = proxy_server
        self._session: Optional[boto3.Session] = None
        self._sts_client = None

    @property
    def session(self) -> boto3.Session:
        if self._session is None:
            kwargs = {"profile_name": self.profile_name, "region_name": self.region}
            if self.credentials is not None:
                kwargs.update(
                    aws_access_key_id=self.credentials.access_key_id,
                    aws_secret_access_key=self.credentials.secret_access_key,
                    aws_session_token=self.credentials.session_token,
                )
            self._session = boto3.Session(**kwargs)
        return self._session

    @property
    def sts_client(self):
        if self._sts_client is None:
            config = Config(proxies={"http": self.proxy_server, "https": self.proxy_server}) \
                if self.proxy_server else None
            self._sts_client = self.session.client("sts", region_name=self.region, config=config)
        return self._sts_client

    def _lookup(self) -> Identity:
        credentials = self.session.get_credentials()
        if credentials is None:
            raise CredentialsLoadError("Credentials could not be loaded, please check your inputs")
        access_key_id = credentials.get_frozen_credentials().access_key
        if not access_key_id:
            raise CredentialsLoadError("Access key ID empty after loading credentials")

        response = self.sts_client.get_caller_identity()
        return Identity(
            access_key_id=access_key_id,
            arn=response["Arn"],
            account=response.get("Account"),
            user_id=response.get("UserId"),
        )

    async def get_caller_identity(self) -> Identity:
        """Look up the caller identity of the session's credentials."""
        return await asyncio.to_thread(self._lookup)
