"""Utility functions for pr-extract."""

from pr_extract.utils.logging import (
    setup_logging,
    get_logger,
    PRExtractError,
    GitHubAPIError,
    AuthenticationError,
    NotFoundError,
    ApiError,
    InitializationError,
    PreconditionError,
    FileWriteError,
    ValidationError,
)
from pr_extract.utils.files import ensure_directory_exists, write_file
from pr_extract.utils.validation import RepoName, parse_repo_name, describe_token

__all__ = [
    "setup_logging",
    "get_logger",
    "PRExtractError",
    "GitHubAPIError",
    "AuthenticationError",
    "NotFoundError",
    "ApiError",
    "InitializationError",
    "PreconditionError",
    "FileWriteError",
    "ValidationError",
    "ensure_directory_exists",
    "write_file",
    "RepoName",
    "parse_repo_name",
    "describe_token",
]
