"""
Tests for the GitHub Actions helpers.
"""

import os
import pytest
from ci_credentials.utils.github_actions import (
    export_account_id,
    export_credentials,
    export_variable,
    github_context,
)

@pytest.fixture
def github_env(tmp_path, monkeypatch):
    """Point GITHUB_ENV and GITHUB_OUTPUT at temporary files."""
    env_file = tmp_path / "github_env"
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_ENV", str(env_file))
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN"):
        # setenv first so teardown restores the original state
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return env_file, output_file

def test_export_variable_writes_env_file(github_env):
    """Test exporting a variable to later steps."""
    env_file, _ = github_env
    export_variable("FOO", "bar")
    assert os.environ["FOO"] == "bar"
    assert env_file.read_text() == "FOO=bar\n"
    del os.environ["FOO"]

def test_export_credentials_masks_values(github_env, mock_creds, capsys):
    """Test that each credential is masked and exported."""
    env_file, _ = github_env
    export_credentials(mock_creds)

    out = capsys.readouterr().out
    assert "::add-mask::mockSecretAccessKey" in out
    assert "::add-mask::mockSessionToken" in out
    assert "AWS_SESSION_TOKEN=mockSessionToken" in env_file.read_text()
    assert os.environ["AWS_ACCESS_KEY_ID"] == "mockAccessKeyId"

def test_export_account_id(github_env, direct_identity, capsys):
    """Test publishing the account id as a step output."""
    _, output_file = github_env
    assert export_account_id(direct_identity) == "123456789012"
    assert output_file.read_text() == "aws-account-id=123456789012\n"
    assert "::add-mask::123456789012" in capsys.readouterr().out

def test_github_context_is_sanitized():
    """Test that context values are sanitized and unset ones skipped."""
    environ = {
        "GITHUB_ACTOR": "dependabot[bot]",
        "GITHUB_WORKFLOW": "Build & Deploy",
        "GITHUB_REPOSITORY": "octo/repo",
    }
    assert github_context(environ) == {
        "actor": "dependabot_bot_",
        "workflow": "Build _ Deploy",
        "repository": "octo/repo",
    }
