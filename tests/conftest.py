"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the ci_credentials package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ci_credentials.models import Credentials, Identity

# In-memory filesystem
class FakeFileSystem:
    """Records every call so tests can assert on filesystem access."""

    def __init__(self, files=None, dirs=None):
        self.files = dict(files or {})
        self.dirs = set(dirs or [])
        self.calls = []

    async def exists(self, path):
        self.calls.append(("exists", path))
        return path in self.files or path in self.dirs

    async def makedirs(self, path):
        self.calls.append(("makedirs", path))
        self.dirs.add(path)

    async def read_text(self, path):
        self.calls.append(("read_text", path))
        return self.files[path]

    async def write_text(self, path, text):
        self.calls.append(("write_text", path))
        self.files[path] = text

    def called(self, name):
        """Return the paths passed to one kind of call."""
        return [path for call, path in self.calls if call == name]

# Identity lookup that replays canned results
class FakeIdentityLookup:
    """Returns (or raises) each queued result in turn."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def get_caller_identity(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result

@pytest.fixture
def mock_creds():
    """Complete credentials for testing."""
    return Credentials(
        access_key_id="mockAccessKeyId",
        secret_access_key="mockSecretAccessKey",
        session_token="mockSessionToken",
    )

@pytest.fixture
def direct_identity():
    """Identity of a directly assumed role."""
    return Identity(
        access_key_id="ASIADIRECT",
        arn="arn:aws:sts::123456789012:assumed-role/deploy/GitHubActions",
        account="123456789012",
        user_id="AROAEXAMPLE:GitHubActions",
    )

@pytest.fixture
def chained_identity():
    """Identity of a role-chained session."""
    return Identity(
        access_key_id="ASIACHAINED",
        arn="arn:aws:sts::123456789012:assumed-role/deploy/GitHubActions-chained",
        account="123456789012",
    )

@pytest.fixture
def fake_fs():
    """Empty in-memory filesystem."""
    return FakeFileSystem()

@pytest.fixture
def no_sleep():
    """Sleep replacement that records requested delays."""
    delays = []

    async def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep

@pytest.fixture
def make_fs():
    """Factory for in-memory filesystems with existing files and directories."""
    return FakeFileSystem

@pytest.fixture
def make_lookup():
    """Factory for identity lookups replaying canned results."""
    return FakeIdentityLookup
