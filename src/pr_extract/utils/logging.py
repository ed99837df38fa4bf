"""Logging configuration and custom exceptions for pr-extract."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


class PRExtractError(Exception):
    """Base exception for pr-extract errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InitializationError(PRExtractError):
    """Raised when the GitHub API client cannot be constructed."""

    pass


class ValidationError(PRExtractError):
    """Exception raised when input validation fails."""

    pass


class PreconditionError(PRExtractError):
    """Raised when an extraction is attempted without required collaborators."""

    pass


class FileWriteError(PRExtractError):
    """Raised when the diff file cannot be persisted."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


class GitHubAPIError(PRExtractError):
    """Exception raised for GitHub API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class AuthenticationError(GitHubAPIError):
    """GitHub rejected the credentials (HTTP 401)."""

    pass


class NotFoundError(GitHubAPIError):
    """Repository, pull request or endpoint not found (HTTP 404)."""

    pass


class ApiError(GitHubAPIError):
    """Any other GitHub API or transport failure."""

    pass


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
    """
    console = Console(stderr=True)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                show_path=False,
            )
        ],
    )

    # Request lines would otherwise duplicate our own debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: Configured logger instance.
    """
    return logging.getLogger(name)
