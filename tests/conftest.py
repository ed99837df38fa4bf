"""Pytest configuration and shared fixtures for pr-extract tests."""

from typing import Any, Callable, Optional

import httpx
import pytest
from pydantic import SecretStr

from pr_extract.config import ExtractionConfig
from pr_extract.github.client import GitHubService
from pr_extract.models.context import ActionInputs
from tests.fixtures import load_sample_diff, load_sample_pr_files, load_sample_pr_response


class FakeGitHubAPI:
    """In-memory stand-in for the GitHub REST endpoints used by pr-extract.

    Served through ``httpx.MockTransport``; every request is recorded.
    """

    def __init__(
        self,
        pr: dict[str, Any],
        files: list[dict[str, Any]],
        diff: str,
        login: str = "alice",
    ) -> None:
        self.pr = pr
        self.files = files
        self.diff = diff
        self.login = login
        self.requests: list[httpx.Request] = []
        # path suffix -> status code to return instead of data
        self.failures: dict[str, int] = {}

    def fail(self, path_suffix: str, status_code: int) -> None:
        """Make requests whose path ends with ``path_suffix`` fail."""
        self.failures[path_suffix] = status_code

    def file_pages(self) -> list[httpx.Request]:
        """Recorded requests for the files listing."""
        return [r for r in self.requests if r.url.path.endswith("/files")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        for suffix, status in self.failures.items():
            if path.endswith(suffix):
                return httpx.Response(status, json={"message": "failure"})

        if path.endswith("/user"):
            return httpx.Response(200, json={"login": self.login})

        if path.endswith("/files"):
            per_page = int(request.url.params.get("per_page", "30"))
            page = int(request.url.params.get("page", "1"))
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.files[start:start + per_page])

        if path.endswith(f"/pulls/{self.pr['number']}"):
            if request.headers.get("accept") == "application/vnd.github.diff":
                return httpx.Response(
                    200,
                    content=self.diff.encode("utf-8"),
                    headers={"content-type": "text/plain; charset=utf-8"},
                )
            return httpx.Response(200, json=self.pr)

        return httpx.Response(404, json={"message": "Not Found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_file_row(filename: str, status: str = "modified") -> dict[str, Any]:
    """Build a minimal pull request file payload."""
    return {
        "filename": filename,
        "status": status,
        "additions": 1,
        "deletions": 1,
        "changes": 2,
    }


@pytest.fixture
def sample_pr_response() -> dict[str, Any]:
    """Sample pull request API payload."""
    return load_sample_pr_response()


@pytest.fixture
def sample_pr_files() -> list[dict[str, Any]]:
    """Sample pull request files payload."""
    return load_sample_pr_files()


@pytest.fixture
def sample_diff() -> str:
    """Sample unified diff."""
    return load_sample_diff()


@pytest.fixture
def fake_github(sample_pr_response, sample_pr_files, sample_diff) -> FakeGitHubAPI:
    """Fake GitHub API serving the sample payloads."""
    return FakeGitHubAPI(sample_pr_response, sample_pr_files, sample_diff)


@pytest.fixture
def file_rows() -> Callable[[int], list[dict[str, Any]]]:
    """Factory for ``n`` distinct file payloads."""
    def _rows(n: int) -> list[dict[str, Any]]:
        return [make_file_row(f"src/file_{i:04d}.py") for i in range(n)]
    return _rows


@pytest.fixture
def extraction_config(tmp_path) -> ExtractionConfig:
    """Extraction config writing into a per-test temp directory."""
    return ExtractionConfig(
        max_diff_size=1000,
        temp_dir=tmp_path / "pr-extract",
    )


@pytest.fixture
def make_service(fake_github) -> Callable[..., GitHubService]:
    """Factory for a GitHubService backed by the fake API."""
    def _make(
        max_diff_size: int = 1000,
        base_url: Optional[str] = None,
        token: str = "ghp_testtoken1234567890",
    ) -> GitHubService:
        return GitHubService(
            token=token,
            owner="o",
            repo="r",
            base_url=base_url,
            max_diff_size=max_diff_size,
            transport=fake_github.transport(),
        )
    return _make


@pytest.fixture
def action_inputs() -> ActionInputs:
    """Complete extraction inputs for PR 42 of o/r."""
    return ActionInputs(
        pull_number=42,
        repo_name="o/r",
        github_token=SecretStr("ghp_testtoken1234567890"),
    )


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset cached settings between tests."""
    yield
    from pr_extract.config import get_settings

    get_settings.cache_clear()
