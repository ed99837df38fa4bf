"""Extraction inputs and the record handed to template rendering."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from pr_extract.models.github import PullRequestFile


class ActionInputs(BaseModel):
    """Inputs that drive an extraction run."""

    model_config = ConfigDict(frozen=True)

    pull_number: Optional[int] = Field(default=None, description="Pull request number")
    repo_name: Optional[str] = Field(default=None, description="Repository in owner/repo format")
    github_token: Optional[SecretStr] = Field(default=None, description="GitHub token")
    github_api_url: Optional[str] = Field(
        default=None,
        description="GitHub Enterprise base URL (api/v3 is appended when missing)",
    )

    def token_value(self) -> str:
        """Return the raw token, or an empty string when unset."""
        if self.github_token is None:
            return ""
        return self.github_token.get_secret_value()


class PRRepo(BaseModel):
    """Repository reference with the owner flattened to its login."""

    model_config = ConfigDict(frozen=True)

    full_name: str
    name: str
    owner: str


class PRBranch(BaseModel):
    """Branch reference in the extraction record."""

    model_config = ConfigDict(frozen=True)

    ref: str
    sha: str
    repo: PRRepo


class PRData(BaseModel):
    """Normalized pull request data consumed by templates."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    author: str
    head: PRBranch
    base: PRBranch
    body: str = ""
    state: str
    changed_files: str = Field(default="", description="Newline-separated file names")
    changed_files_list: list[PullRequestFile] = Field(default_factory=list)
    diff_file: str = Field(..., description="Path of the written diff file")

    def to_template_context(self) -> dict[str, Any]:
        """Convert to a plain dictionary for template rendering."""
        return self.model_dump(mode="json")
