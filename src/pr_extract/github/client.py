"""GitHub API service for pull request extraction.

Wraps an ``httpx.AsyncClient`` and translates GitHub REST responses into
the local models in :mod:`pr_extract.models.github`. Each call is a single
attempt; failures are logged and raised as categorized ``GitHubAPIError``
subclasses.
"""

from typing import Any, Optional

import httpx

from pr_extract.config import DEFAULT_MAX_DIFF_SIZE
from pr_extract.models.github import (
    BranchInfo,
    PullRequestDiff,
    PullRequestFile,
    PullRequestInfo,
    PullRequestUser,
    RepoInfo,
    RepoOwner,
)
from pr_extract.utils.logging import (
    ApiError,
    AuthenticationError,
    GitHubAPIError,
    InitializationError,
    NotFoundError,
    get_logger,
)
from pr_extract.utils.validation import describe_token

logger = get_logger(__name__)

# GitHub API base URL
GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
ENTERPRISE_API_SUFFIX = "/api/v3"

# GitHub's maximum page size for the PR files listing
FILES_PAGE_SIZE = 100

API_ERROR_PREFIX = "GitHub API error"

AUTH_FAILED_GUIDANCE = """Authentication failed. This could be due to:
1. Invalid or expired GitHub token
2. Token doesn't have required permissions (needs 'repo' scope)
3. For GitHub Enterprise: Incorrect github_api_url parameter
4. For GitHub Enterprise: Token might need to be generated from the Enterprise instance"""

NOT_FOUND_GUIDANCE = """Repository or PR not found. Check:
1. Repository name format (should be 'owner/repo')
2. PR number exists
3. Token has access to the repository"""

ENDPOINT_NOT_FOUND_GUIDANCE = (
    "GitHub API endpoint not found. Please verify the github_api_url is "
    "correct for your GitHub Enterprise instance."
)


def resolve_api_url(base_url: Optional[str]) -> str:
    """Resolve the REST API root for github.com or a GitHub Enterprise host.

    Args:
        base_url: Optional Enterprise URL, with or without ``/api/v3``

    Returns:
        API root without a trailing slash
    """
    if not base_url:
        return GITHUB_API_BASE

    url = base_url.rstrip("/")
    if not url.endswith(ENTERPRISE_API_SUFFIX):
        url += ENTERPRISE_API_SUFFIX
        logger.debug(f"Adjusted GitHub API URL to include {ENTERPRISE_API_SUFFIX}: {base_url} -> {url}")
    return url


def truncate_diff(content: str, max_size: int) -> PullRequestDiff:
    """Bound a diff to ``max_size`` UTF-8 bytes.

    The cut is made on a character boundary, so multi-byte text may end up
    a few bytes shorter than ``max_size``.

    Args:
        content: Full diff text
        max_size: Maximum size in bytes

    Returns:
        PullRequestDiff with the full byte size and truncation flag
    """
    encoded = content.encode("utf-8")
    size = len(encoded)
    if size <= max_size:
        return PullRequestDiff(content=content, size=size, truncated=False)

    # A partial trailing sequence is all that "ignore" can drop here
    head = encoded[:max_size].decode("utf-8", errors="ignore")
    return PullRequestDiff(content=head, size=size, truncated=True)


def _branch_from_api(data: dict[str, Any]) -> BranchInfo:
    repo = data["repo"]
    return BranchInfo(
        ref=data["ref"],
        sha=data["sha"],
        repo=RepoInfo(
            full_name=repo["full_name"],
            name=repo["name"],
            owner=RepoOwner(login=repo["owner"]["login"]),
        ),
    )


def _pull_request_from_api(data: dict[str, Any]) -> PullRequestInfo:
    user = data.get("user") or {}
    return PullRequestInfo(
        number=data["number"],
        title=data["title"],
        body=data.get("body"),
        state=data["state"],
        user=PullRequestUser(login=user.get("login") or "unknown"),
        head=_branch_from_api(data["head"]),
        base=_branch_from_api(data["base"]),
    )


def _file_from_api(data: dict[str, Any]) -> PullRequestFile:
    return PullRequestFile(
        filename=data["filename"],
        status=data["status"],
        additions=data.get("additions", 0),
        deletions=data.get("deletions", 0),
        changes=data.get("changes", 0),
    )


class GitHubService:
    """GitHub REST client bound to a single repository.

    Construction only prepares the HTTP client; no request is sent until
    one of the fetch methods is awaited.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        base_url: Optional[str] = None,
        *,
        max_diff_size: int = DEFAULT_MAX_DIFF_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the GitHub service.

        Args:
            token: GitHub token
            owner: Repository owner
            repo: Repository name
            base_url: Optional GitHub Enterprise URL
            max_diff_size: Diff size in bytes above which content is truncated
            transport: Optional httpx transport (used by tests)

        Raises:
            InitializationError: If the client cannot be configured
        """
        if not token:
            raise InitializationError("Failed to initialize GitHub API client: token is required")
        if not owner or not repo:
            raise InitializationError(
                "Failed to initialize GitHub API client: owner and repo are required",
                details=f"owner={owner!r}, repo={repo!r}",
            )

        self.owner = owner
        self.repo = repo
        self.max_diff_size = max_diff_size
        self.api_url = resolve_api_url(base_url)

        token_info = describe_token(token)
        logger.debug(
            f"GitHub token info: prefix={token_info['prefix']}, "
            f"type={token_info['type']}, length={token_info['length']}"
        )

        try:
            self._client = httpx.AsyncClient(
                headers={
                    "Accept": "application/vnd.github+json",
                    "Authorization": f"Bearer {token}",
                    "X-GitHub-Api-Version": GITHUB_API_VERSION,
                },
                timeout=30.0,
                transport=transport,
            )
        except Exception as e:
            logger.error(f"Failed to create GitHub API client: {type(e).__name__}")
            raise InitializationError(
                f"Failed to initialize GitHub API client: {type(e).__name__}",
                details=f"api_url={self.api_url}",
            ) from e

        logger.debug(f"GitHubService initialized for {owner}/{repo} ({self.api_url})")

    @property
    def _repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"

    async def _get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        accept: Optional[str] = None,
    ) -> httpx.Response:
        """Send a GET request and raise for error statuses."""
        headers = {"Accept": accept} if accept else None
        response = await self._client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response

    def _api_error(
        self,
        error: Exception,
        message: str,
        pull_number: Optional[int] = None,
    ) -> GitHubAPIError:
        """Log a failure and convert it to a categorized error.

        Args:
            error: The underlying failure
            message: Operation description used as the error prefix
            pull_number: Pull request number, if any

        Returns:
            AuthenticationError for 401, NotFoundError for 404, ApiError otherwise
        """
        details = f"owner={self.owner}, repo={self.repo}"
        if pull_number is not None:
            details += f", pr={pull_number}"

        if isinstance(error, httpx.HTTPStatusError):
            status = error.response.status_code
            if status == 401:
                logger.error(f"{message} - {AUTH_FAILED_GUIDANCE}\n({error})")
                return AuthenticationError(
                    f"{message} - {AUTH_FAILED_GUIDANCE}",
                    status_code=status,
                    details=details,
                )
            if status == 404:
                logger.error(f"{message} - {NOT_FOUND_GUIDANCE}\n({error})")
                return NotFoundError(
                    f"{message} - {NOT_FOUND_GUIDANCE}",
                    status_code=status,
                    details=details,
                )
            logger.error(f"{message}: HTTP {status} ({error})")
            return ApiError(f"{message}: HTTP {status}", status_code=status, details=details)

        logger.error(f"{message}: {error}")
        return ApiError(f"{message}: {error}", details=details)

    async def test_authentication(self) -> str:
        """Check that the token is accepted by the API.

        Returns:
            Login of the authenticated user

        Raises:
            AuthenticationError: If the token is rejected
            ApiError: If the endpoint is missing or the request fails
        """
        logger.debug(f"Testing GitHub authentication against {self.api_url}")
        try:
            response = await self._get(f"{self.api_url}/user")
            login = response.json()["login"]
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 401:
                logger.error(f"Authentication test failed: HTTP {status}")
                raise AuthenticationError(
                    "GitHub authentication failed. Please check your token and "
                    "ensure it has the required permissions.",
                    status_code=status,
                ) from e
            if status == 404:
                logger.error(f"Authentication test failed: HTTP {status}")
                raise ApiError(ENDPOINT_NOT_FOUND_GUIDANCE, status_code=status) from e
            logger.error(f"Authentication test failed: HTTP {status}")
            raise ApiError(
                f"GitHub API connectivity test failed: HTTP {status}",
                status_code=status,
            ) from e
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Authentication test failed: {e}")
            raise ApiError(f"GitHub API connectivity test failed: {e}") from e

        logger.debug(f"Authentication successful as {login}")
        return login

    async def get_pull_request(self, pull_number: int) -> PullRequestInfo:
        """Fetch pull request metadata.

        Args:
            pull_number: Pull request number

        Returns:
            PullRequestInfo with author defaulting to "unknown"

        Raises:
            AuthenticationError: On HTTP 401
            NotFoundError: On HTTP 404
            ApiError: On any other failure
        """
        logger.debug(f"Fetching PR {pull_number} from {self.owner}/{self.repo}")
        try:
            response = await self._get(f"{self._repo_url}/pulls/{pull_number}")
            return _pull_request_from_api(response.json())
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            raise self._api_error(
                e,
                f"{API_ERROR_PREFIX}: Failed to fetch PR {pull_number}",
                pull_number,
            ) from e

    async def get_pull_request_files(self, pull_number: int) -> list[PullRequestFile]:
        """Fetch every file changed by a pull request.

        Pages are requested until one comes back with fewer than
        ``FILES_PAGE_SIZE`` entries.

        Args:
            pull_number: Pull request number

        Returns:
            Files in API order across pages

        Raises:
            AuthenticationError: On HTTP 401
            NotFoundError: On HTTP 404
            ApiError: On any other failure
        """
        logger.debug(f"Fetching files for PR {pull_number}")
        all_files: list[PullRequestFile] = []
        page = 1

        try:
            while True:
                logger.debug(f"Fetching PR files page {page} (pr={pull_number}, per_page={FILES_PAGE_SIZE})")
                response = await self._get(
                    f"{self._repo_url}/pulls/{pull_number}/files",
                    params={"per_page": FILES_PAGE_SIZE, "page": page},
                )
                data = response.json()
                all_files.extend(_file_from_api(item) for item in data)

                logger.debug(
                    f"Fetched {len(data)} files from page {page}, "
                    f"{len(all_files)} so far"
                )

                if len(data) < FILES_PAGE_SIZE:
                    break
                page += 1
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            raise self._api_error(
                e,
                f"{API_ERROR_PREFIX}: Failed to fetch PR files for PR {pull_number}",
                pull_number,
            ) from e

        logger.info(f"Fetched {len(all_files)} PR files across {page} page(s)")
        return all_files

    async def get_pull_request_diff(self, pull_number: int) -> PullRequestDiff:
        """Fetch the unified diff of a pull request.

        Args:
            pull_number: Pull request number

        Returns:
            PullRequestDiff, truncated to ``max_diff_size`` bytes when larger

        Raises:
            AuthenticationError: On HTTP 401
            NotFoundError: On HTTP 404
            ApiError: On any other failure
        """
        logger.debug(f"Fetching diff for PR {pull_number}")
        try:
            response = await self._get(
                f"{self._repo_url}/pulls/{pull_number}",
                accept="application/vnd.github.diff",
            )
        except httpx.HTTPError as e:
            raise self._api_error(
                e,
                f"{API_ERROR_PREFIX}: Failed to fetch PR diff for PR {pull_number}",
                pull_number,
            ) from e

        return truncate_diff(response.text, self.max_diff_size)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
