"""PR data extractor for fetching metadata, files and diff from GitHub."""

from enum import Enum
from pathlib import Path
from typing import Optional

import httpx

from pr_extract.config import ExtractionConfig
from pr_extract.extractors.base import BaseExtractor
from pr_extract.github.client import GitHubService
from pr_extract.models.context import ActionInputs, PRBranch, PRData, PRRepo
from pr_extract.models.github import BranchInfo, PullRequestFile, PullRequestInfo
from pr_extract.utils.files import ensure_directory_exists, write_file
from pr_extract.utils.logging import (
    InitializationError,
    PreconditionError,
    ValidationError,
    get_logger,
)
from pr_extract.utils.validation import parse_repo_name

logger = get_logger(__name__)


class ExtractionStage(str, Enum):
    """Progress of a single extraction call."""

    NOT_STARTED = "not_started"
    FETCHING_METADATA = "fetching_metadata"
    FETCHING_FILES = "fetching_files"
    FETCHING_DIFF = "fetching_diff"
    WRITING_DIFF_FILE = "writing_diff_file"
    ASSEMBLING_RECORD = "assembling_record"
    DONE = "done"
    FAILED = "failed"


def _flatten_branch(branch: BranchInfo) -> PRBranch:
    return PRBranch(
        ref=branch.ref,
        sha=branch.sha,
        repo=PRRepo(
            full_name=branch.repo.full_name,
            name=branch.repo.name,
            owner=branch.repo.owner.login,
        ),
    )


def build_pr_data(
    pr_info: PullRequestInfo,
    files: list[PullRequestFile],
    diff_file: str,
) -> PRData:
    """Assemble the extraction record.

    Args:
        pr_info: Pull request metadata
        files: Changed files in API order
        diff_file: Path of the written diff file

    Returns:
        PRData with owner logins flattened and a missing body as ""
    """
    return PRData(
        number=pr_info.number,
        title=pr_info.title,
        author=pr_info.user.login,
        head=_flatten_branch(pr_info.head),
        base=_flatten_branch(pr_info.base),
        body=pr_info.body or "",
        state=pr_info.state,
        changed_files="\n".join(file.filename for file in files),
        changed_files_list=files,
        diff_file=diff_file,
    )


class PRExtractor(BaseExtractor[PRData]):
    """Extracts pull request data for template rendering."""

    def __init__(
        self,
        github_service: Optional[GitHubService] = None,
        config: Optional[ExtractionConfig] = None,
    ) -> None:
        """Initialize the PR extractor.

        Args:
            github_service: Configured GitHub service. Without one,
                            extraction fails with PreconditionError.
            config: Extraction limits and paths
        """
        super().__init__("PR Data")
        self._github_service = github_service
        self._config = config or ExtractionConfig()
        self.stage = ExtractionStage.NOT_STARTED
        self.failed_stage: Optional[ExtractionStage] = None

    @property
    def github_service(self) -> Optional[GitHubService]:
        """The configured GitHub service, if any."""
        return self._github_service

    @classmethod
    def create(
        cls,
        inputs: ActionInputs,
        config: Optional[ExtractionConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "PRExtractor":
        """Create an extractor configured for the given inputs.

        Incomplete or invalid repository settings never raise here; the
        extractor is returned without a GitHub service instead.

        Args:
            inputs: Extraction inputs
            config: Extraction limits and paths
            transport: Optional httpx transport for the GitHub client

        Returns:
            PRExtractor instance
        """
        config = config or ExtractionConfig()
        token = inputs.token_value()

        if inputs.repo_name and token:
            try:
                repo_info = parse_repo_name(inputs.repo_name)
                service = GitHubService(
                    token=token,
                    owner=repo_info.owner,
                    repo=repo_info.repo,
                    base_url=inputs.github_api_url,
                    max_diff_size=config.max_diff_size,
                    transport=transport,
                )
                logger.debug(f"PRExtractor created with GitHubService for {repo_info.owner}/{repo_info.repo}")
                return cls(service, config)
            except (ValidationError, InitializationError) as e:
                logger.debug(f"Failed to create GitHubService, continuing without it: {e.message}")

        logger.debug("PRExtractor created without GitHubService")
        return cls(config=config)

    def should_extract(self, inputs: ActionInputs) -> bool:
        """Return True when pull number, repository and token are all set."""
        return bool(
            inputs.pull_number is not None
            and inputs.pull_number > 0
            and inputs.repo_name
            and inputs.token_value()
        )

    def _enter(self, stage: ExtractionStage) -> None:
        logger.debug(f"PR extraction stage: {stage.value}")
        self.stage = stage

    async def perform_extraction(self, inputs: ActionInputs) -> PRData:
        """Fetch PR metadata, files and diff, and assemble PRData.

        Args:
            inputs: Extraction inputs with a positive pull_number

        Returns:
            PRData referencing the written diff file

        Raises:
            PreconditionError: If no GitHub service is configured
            GitHubAPIError: If any API call fails
            FileWriteError: If the diff file cannot be written
        """
        self.stage = ExtractionStage.NOT_STARTED
        self.failed_stage = None

        github_service = self._github_service
        if github_service is None:
            raise PreconditionError("GitHubService not provided")

        pull_number = inputs.pull_number
        try:
            if self._config.check_authentication:
                await github_service.test_authentication()

            self._enter(ExtractionStage.FETCHING_METADATA)
            pr_info = await github_service.get_pull_request(pull_number)

            self._enter(ExtractionStage.FETCHING_FILES)
            files = await github_service.get_pull_request_files(pull_number)

            diff_file = await self._write_diff_file(pull_number, github_service)

            self._enter(ExtractionStage.ASSEMBLING_RECORD)
            pr_data = build_pr_data(pr_info, files, str(diff_file))
        except Exception:
            self.failed_stage = self.stage
            self.stage = ExtractionStage.FAILED
            logger.error(f"PR extraction failed while {self.failed_stage.value} (pr={pull_number})")
            raise

        self._enter(ExtractionStage.DONE)
        logger.info(
            f"PR data extraction completed: pr={pull_number}, "
            f"files={len(files)}, diff_file={diff_file}"
        )
        return pr_data

    async def _write_diff_file(self, pull_number: int, github_service: GitHubService) -> Path:
        """Fetch the diff and write it under the temp directory."""
        self._enter(ExtractionStage.FETCHING_DIFF)
        diff = await github_service.get_pull_request_diff(pull_number)

        if diff.truncated:
            logger.warning(
                f"PR diff was truncated due to size: {diff.size} bytes "
                f"(limit {self._config.max_diff_size})"
            )

        self._enter(ExtractionStage.WRITING_DIFF_FILE)
        diff_file = self._config.diff_file_path(pull_number)
        ensure_directory_exists(self._config.temp_dir)
        write_file(diff_file, diff.content)

        logger.debug(f"Diff file written: {diff_file} ({diff.size} bytes)")
        return diff_file

    async def close(self) -> None:
        """Close the underlying GitHub service."""
        if self._github_service is not None:
            await self._github_service.close()
