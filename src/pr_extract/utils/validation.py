"""Input validation helpers."""

import re
from typing import Any, NamedTuple

from pr_extract.utils.logging import ValidationError

_REPO_PART = re.compile(r"^[A-Za-z0-9_.-]+$")

# Ordered so that the longer fine-grained prefix wins
_TOKEN_TYPES = (
    ("github_pat_", "fine_grained_token"),
    ("ghp_", "personal_access_token"),
    ("ghs_", "server_to_server_token"),
    ("gho_", "oauth_token"),
    ("ghu_", "user_access_token"),
)


class RepoName(NamedTuple):
    """Repository owner and name."""

    owner: str
    repo: str


def parse_repo_name(repo_name: str) -> RepoName:
    """Parse an ``owner/repo`` string.

    Args:
        repo_name: Repository in ``owner/repo`` format

    Returns:
        RepoName with owner and repo

    Raises:
        ValidationError: If the format is invalid
    """
    parts = (repo_name or "").split("/")
    if len(parts) != 2 or not all(_REPO_PART.match(part) for part in parts):
        raise ValidationError(
            f"Invalid repository name: {repo_name!r}",
            details="Expected format 'owner/repo'",
        )
    return RepoName(owner=parts[0], repo=parts[1])


def classify_token(token: str) -> str:
    """Return the GitHub token type implied by its prefix."""
    for prefix, token_type in _TOKEN_TYPES:
        if token.startswith(prefix):
            return token_type
    return "unknown"


def describe_token(token: str) -> dict[str, Any]:
    """Describe a token for diagnostics without exposing it.

    Args:
        token: Raw credential

    Returns:
        Dict with prefix (first four characters), type and length
    """
    return {
        "prefix": token[:4] + "...",
        "type": classify_token(token),
        "length": len(token),
    }
