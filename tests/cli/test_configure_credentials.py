"""
Tests for the CI credentials command-line script.
"""

import pytest
from unittest.mock import patch, AsyncMock
from scripts import configure_credentials

@pytest.fixture
def aws_env(monkeypatch):
    """Set credentials in the environment and clear GitHub Actions files."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "ASIADIRECT")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "token")
    for name in ("GITHUB_ENV", "GITHUB_OUTPUT", "GITHUB_ACTOR", "GITHUB_WORKFLOW"):
        monkeypatch.delenv(name, raising=False)

@pytest.fixture
def mock_lookup(direct_identity):
    """Mock the STS lookup used by the script."""
    with patch("scripts.configure_credentials.StsIdentityLookup") as mock_cls:
        mock_cls.return_value.get_caller_identity = AsyncMock(return_value=direct_identity)
        yield mock_cls

def test_save_writes_profile(aws_env, tmp_path, capsys):
    """Test saving environment credentials to a profile."""
    target = tmp_path / "credentials"

    configure_credentials.main(["save", "--profile-name", "ci", "--credentials-file", str(target)])

    assert "[ci]\naws_access_key_id=ASIADIRECT\n" in target.read_text(encoding="utf-8")
    assert "✅ Saved credentials to profile: ci" in capsys.readouterr().out

def test_save_with_missing_credentials_fails(aws_env, monkeypatch, tmp_path, capsys):
    """Test the exit code when a credential is missing."""
    monkeypatch.delenv("AWS_SESSION_TOKEN")
    target = tmp_path / "credentials"

    with pytest.raises(SystemExit) as excinfo:
        configure_credentials.main(["save", "--profile-name", "ci", "--credentials-file", str(target)])

    assert excinfo.value.code == 1
    assert not target.exists()
    assert "missing credentials" in capsys.readouterr().out

def test_save_validates_before_writing(aws_env, mock_lookup, tmp_path, capsys):
    """Test that a failed validation leaves the file untouched."""
    target = tmp_path / "credentials"

    with pytest.raises(SystemExit):
        configure_credentials.main([
            "save", "--profile-name", "ci", "--credentials-file", str(target),
            "--validate", "--role-chaining",
        ])

    assert not target.exists()
    assert "Expected a role-chained session" in capsys.readouterr().out

def test_validate_success(aws_env, mock_lookup, capsys):
    """Test validating with a matching access key id."""
    configure_credentials.main(["validate", "--expected-access-key-id", "ASIADIRECT"])
    assert "✅ Credentials are valid" in capsys.readouterr().out

def test_validate_mismatch_exits(aws_env, mock_lookup, capsys):
    """Test validating with a different access key id."""
    with pytest.raises(SystemExit) as excinfo:
        configure_credentials.main(["validate", "--expected-access-key-id", "ASIAOTHER"])
    assert excinfo.value.code == 1
    assert "❌ Credential validation failed" in capsys.readouterr().out

def test_list_profiles(tmp_path, capsys):
    """Test listing profiles from a credentials file."""
    target = tmp_path / "credentials"
    target.write_text("[default]\nx=1\n\n[ci]\ny=2\n", encoding="utf-8")

    configure_credentials.main(["list", "--credentials-file", str(target)])

    out = capsys.readouterr().out
    assert "  default\n  ci\n" in out

def test_no_command_prints_help(capsys):
    """Test running without a command."""
    with pytest.raises(SystemExit) as excinfo:
        configure_credentials.main([])
    assert excinfo.value.code == 0
