"""Data models for pr-extract."""

from pr_extract.models.github import (
    BranchInfo,
    PullRequestDiff,
    PullRequestFile,
    PullRequestInfo,
    PullRequestUser,
    RepoInfo,
    RepoOwner,
)
from pr_extract.models.context import ActionInputs, PRBranch, PRData, PRRepo

__all__ = [
    "BranchInfo",
    "PullRequestDiff",
    "PullRequestFile",
    "PullRequestInfo",
    "PullRequestUser",
    "RepoInfo",
    "RepoOwner",
    "ActionInputs",
    "PRBranch",
    "PRData",
    "PRRepo",
]
