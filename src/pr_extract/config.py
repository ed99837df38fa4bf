"""Configuration management for pr-extract using Pydantic Settings."""

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_extract.models.context import ActionInputs

DEFAULT_MAX_DIFF_SIZE = 1_000_000
DEFAULT_DIFF_FILE_PATTERN = "pr-{pull_number}.diff"
DEFAULT_TEMP_DIR = Path(tempfile.gettempdir()) / "pr-extract"


class ExtractionConfig(BaseModel):
    """Limits and paths shared by the GitHub service and extractors."""

    model_config = ConfigDict(frozen=True)

    max_diff_size: int = Field(
        default=DEFAULT_MAX_DIFF_SIZE,
        gt=0,
        description="Maximum diff size in bytes before truncation",
    )
    temp_dir: Path = Field(
        default=DEFAULT_TEMP_DIR,
        description="Directory where diff files are written",
    )
    diff_file_pattern: str = Field(
        default=DEFAULT_DIFF_FILE_PATTERN,
        description="Diff file name, {pull_number} is substituted",
    )
    check_authentication: bool = Field(
        default=False,
        description="Call the /user endpoint before extracting",
    )

    def diff_file_path(self, pull_number: int) -> Path:
        """Return the diff file location for a pull request."""
        return self.temp_dir / self.diff_file_pattern.format(pull_number=pull_number)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials and target
    github_token: Optional[SecretStr] = Field(
        default=None,
        description="GitHub token for API access",
    )
    github_api_url: Optional[str] = Field(
        default=None,
        description="GitHub Enterprise URL, defaults to github.com",
    )
    repo_name: Optional[str] = Field(
        default=None,
        description="Repository in owner/repo format",
    )
    pull_number: Optional[int] = Field(
        default=None,
        description="Pull request number to extract",
    )

    # Extraction configuration
    max_diff_size: int = Field(
        default=DEFAULT_MAX_DIFF_SIZE,
        gt=0,
        description="Maximum diff size in bytes before truncation",
    )
    temp_dir: Path = Field(
        default=DEFAULT_TEMP_DIR,
        description="Directory for the extracted diff file",
    )
    diff_file_pattern: str = Field(
        default=DEFAULT_DIFF_FILE_PATTERN,
        description="Diff file name pattern",
    )
    check_authentication: bool = Field(
        default=False,
        description="Run an authentication check before extraction",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )

    def to_inputs(self) -> ActionInputs:
        """Build extraction inputs from the loaded settings."""
        return ActionInputs(
            pull_number=self.pull_number,
            repo_name=self.repo_name,
            github_token=self.github_token,
            github_api_url=self.github_api_url,
        )

    def extraction_config(self) -> ExtractionConfig:
        """Build the extraction configuration value object."""
        return ExtractionConfig(
            max_diff_size=self.max_diff_size,
            temp_dir=self.temp_dir,
            diff_file_pattern=self.diff_file_pattern,
            check_authentication=self.check_authentication,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings loaded from environment.
    """
    return Settings()
