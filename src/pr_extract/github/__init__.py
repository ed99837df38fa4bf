"""GitHub integration for pr-extract."""

from pr_extract.github.client import GitHubService, resolve_api_url, truncate_diff

__all__ = ["GitHubService", "resolve_api_url", "truncate_diff"]
