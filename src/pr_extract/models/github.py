"""Normalized GitHub API response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RepoOwner(BaseModel):
    """Owner of a repository."""

    model_config = ConfigDict(frozen=True)

    login: str


class RepoInfo(BaseModel):
    """Repository a branch belongs to."""

    model_config = ConfigDict(frozen=True)

    full_name: str
    name: str
    owner: RepoOwner


class BranchInfo(BaseModel):
    """Head or base side of a pull request."""

    model_config = ConfigDict(frozen=True)

    ref: str
    sha: str
    repo: RepoInfo


class PullRequestUser(BaseModel):
    """Pull request author."""

    model_config = ConfigDict(frozen=True)

    login: str = "unknown"


class PullRequestInfo(BaseModel):
    """Pull request metadata as returned by the GitHub API."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    body: Optional[str] = None
    state: str
    user: PullRequestUser = Field(default_factory=PullRequestUser)
    head: BranchInfo
    base: BranchInfo


class PullRequestFile(BaseModel):
    """A file changed by a pull request."""

    model_config = ConfigDict(frozen=True)

    filename: str
    status: str  # added, modified, removed, renamed, ...
    additions: int = 0
    deletions: int = 0
    changes: int = 0


class PullRequestDiff(BaseModel):
    """Unified diff of a pull request."""

    model_config = ConfigDict(frozen=True)

    content: str
    size: int = Field(..., ge=0, description="UTF-8 byte length of the full diff")
    truncated: bool = False
