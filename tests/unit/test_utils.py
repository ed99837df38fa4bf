"""Unit tests for utility helpers."""

import pytest

from pr_extract.utils.files import ensure_directory_exists, write_file
from pr_extract.utils.logging import FileWriteError, PRExtractError, ValidationError
from pr_extract.utils.validation import classify_token, describe_token, parse_repo_name


class TestParseRepoName:
    """Tests for owner/repo parsing."""

    def test_valid(self):
        """Test parsing a plain owner/repo string."""
        parsed = parse_repo_name("my-org/my.cool_repo")
        assert parsed.owner == "my-org"
        assert parsed.repo == "my.cool_repo"

    @pytest.mark.parametrize(
        "value",
        ["", "owner", "owner/", "/repo", "a/b/c", "own er/repo", "https://github.com/o/r"],
    )
    def test_invalid(self, value):
        """Test that malformed names are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            parse_repo_name(value)
        assert isinstance(exc_info.value, PRExtractError)


class TestDescribeToken:
    """Tests for token diagnostics."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("ghp_abcdef", "personal_access_token"),
            ("ghs_abcdef", "server_to_server_token"),
            ("gho_abcdef", "oauth_token"),
            ("ghu_abcdef", "user_access_token"),
            ("github_pat_abcdef", "fine_grained_token"),
            ("0123456789abcdef", "unknown"),
        ],
    )
    def test_classify(self, token, expected):
        """Test token type detection by prefix."""
        assert classify_token(token) == expected

    def test_describe_hides_token(self):
        """Test that only the prefix and length are exposed."""
        info = describe_token("ghp_secretsecret")
        assert info == {"prefix": "ghp_...", "type": "personal_access_token", "length": 16}
        assert "secret" not in str(info)


class TestFiles:
    """Tests for file helpers."""

    def test_ensure_directory_is_idempotent(self, tmp_path):
        """Test repeated directory creation."""
        target = tmp_path / "a" / "b"
        ensure_directory_exists(target)
        ensure_directory_exists(target)
        assert target.is_dir()

    def test_write_file_overwrites(self, tmp_path):
        """Test that writing replaces existing content."""
        target = tmp_path / "out.diff"
        write_file(target, "first")
        write_file(target, "second ✓")
        assert target.read_text(encoding="utf-8") == "second ✓"

    def test_write_file_failure(self, tmp_path):
        """Test that OS errors become FileWriteError."""
        target = tmp_path / "missing" / "out.diff"
        with pytest.raises(FileWriteError) as exc_info:
            write_file(target, "x")
        assert exc_info.value.path == str(target)
