import pytest
from ci_credentials.utils.sanitize import sanitize

def test_removes_brackets_from_github_actor():
    """Test that brackets are replaced, not escaped."""
    assert sanitize("foo[bot]") == "foo_bot_"

def test_removes_special_characters_from_workflow_names():
    """Test replacing every disallowed character one for one."""
    assert sanitize('sdf234@#$%$^&*()_+{}|:"<>?') == "sdf234@__________+___:____"

@pytest.mark.parametrize("value", [
    "octocat",
    "deploy-prod",
    "user@example.com",
    "org/repo",
    "key=value+1.2:3",
    "Build and Test",
    "déploiement",
    "",
])
def test_safe_values_are_unchanged(value):
    """Test that values with only allowed characters pass through."""
    assert sanitize(value) == value

def test_output_never_contains_brackets():
    """Test that nested and unbalanced brackets are all removed."""
    result = sanitize("[[a]]]b[")
    assert "[" not in result and "]" not in result
    assert result == "__a___b_"

def test_newlines_are_replaced():
    """Test that line breaks cannot leak into identifiers."""
    assert sanitize("a\nb\tc") == "a_b_c"

def test_max_length_truncates():
    """Test truncation to a maximum length."""
    assert sanitize("x" * 300, max_length=256) == "x" * 256
