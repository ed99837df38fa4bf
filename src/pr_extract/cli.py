"""CLI interface for pr-extract using Typer."""

import asyncio
import json
import os
from typing import Optional

import typer
from pydantic import SecretStr
from rich.console import Console
from rich.panel import Panel

from pr_extract import __version__
from pr_extract.config import get_settings
from pr_extract.extractors.pr_extractor import PRExtractor
from pr_extract.models.context import ActionInputs, PRData
from pr_extract.utils.logging import get_logger, setup_logging


def is_ci_environment() -> bool:
    """Detect if running in CI environment."""
    return any([
        os.environ.get("CI") == "true",
        os.environ.get("GITHUB_ACTIONS") == "true",
    ])


def set_github_output(name: str, value: str) -> None:
    """Set GitHub Actions output variable."""
    github_output = os.environ.get("GITHUB_OUTPUT")
    if github_output:
        with open(github_output, "a") as f:
            f.write(f"{name}={value}\n")


app = typer.Typer(
    name="pr-extract",
    help="Extract pull request metadata, changed files and diff from GitHub.",
    add_completion=False,
)

_is_ci = is_ci_environment()
console = Console(force_terminal=not _is_ci, no_color=_is_ci)
logger = get_logger(__name__)


async def run_extraction(extractor: PRExtractor, inputs: ActionInputs) -> Optional[PRData]:
    """Run the extractor and release its HTTP client."""
    try:
        return await extractor.extract(inputs)
    finally:
        await extractor.close()


@app.command()
def extract(
    pull_number: Optional[int] = typer.Option(
        None,
        "--pull-number",
        "-n",
        help="Pull request number (default from PULL_NUMBER)",
    ),
    repo: Optional[str] = typer.Option(
        None,
        "--repo",
        "-r",
        help="Repository in owner/repo format (default from REPO_NAME)",
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        help="GitHub Enterprise URL (default from GITHUB_API_URL)",
    ),
    check_auth: bool = typer.Option(
        False,
        "--check-auth",
        help="Verify the token against the API before extracting",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the extracted record as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Extract PR data and write the diff to the temp directory.

    The GitHub token is read from the GITHUB_TOKEN environment variable.
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    base_inputs = settings.to_inputs()
    inputs = base_inputs.model_copy(update={
        "pull_number": pull_number if pull_number is not None else base_inputs.pull_number,
        "repo_name": repo or base_inputs.repo_name,
        "github_api_url": api_url or base_inputs.github_api_url,
    })
    config = settings.extraction_config()
    if check_auth:
        config = config.model_copy(update={"check_authentication": True})

    if not _is_ci and not as_json:
        console.print(Panel.fit(
            f"[bold blue]pr-extract[/bold blue] v{__version__}\n"
            f"[dim]{inputs.repo_name or '?'}#{inputs.pull_number or '?'}[/dim]",
            border_style="blue",
        ))

    extractor = PRExtractor.create(inputs, config)

    try:
        pr_data = asyncio.run(run_extraction(extractor, inputs))
    except KeyboardInterrupt:
        console.print("\n[yellow]Extraction cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.exception("Extraction failed")
        if _is_ci:
            print(f"::error::{e}")
        else:
            console.print(f"\n[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if pr_data is None:
        console.print(
            "[yellow]PR extraction skipped: pull number, repository and token "
            "are all required[/yellow]"
        )
        return

    if _is_ci:
        set_github_output("diff-file", pr_data.diff_file)
        set_github_output("changed-files-count", str(len(pr_data.changed_files_list)))

    if as_json:
        print(json.dumps(pr_data.to_template_context(), indent=2))
        return

    console.print(f"[bold green]Extracted PR #{pr_data.number}[/bold green]: {pr_data.title}")
    console.print(f"  Author: {pr_data.author}")
    console.print(f"  Branches: {pr_data.head.ref} -> {pr_data.base.ref}")
    console.print(f"  Changed files: {len(pr_data.changed_files_list)}")
    console.print(f"  Diff file: {pr_data.diff_file}")


@app.command()
def config() -> None:
    """Display current configuration settings."""
    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[bold red]Error loading config:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()
    console.print("[bold]Current Configuration[/bold]")
    console.print()

    token: Optional[SecretStr] = settings.github_token
    config_items = [
        ("GitHub Token", "***" + token.get_secret_value()[-4:] if token else "Not set"),
        ("GitHub API URL", settings.github_api_url or "https://api.github.com"),
        ("Repository", settings.repo_name or "Not set"),
        ("Pull Number", str(settings.pull_number) if settings.pull_number else "Not set"),
        ("Max Diff Size", str(settings.max_diff_size)),
        ("Temp Dir", str(settings.temp_dir)),
        ("Diff File Pattern", settings.diff_file_pattern),
        ("Log Level", settings.log_level),
    ]

    for name, value in config_items:
        console.print(f"  {name}: [cyan]{value}[/cyan]")

    console.print()


@app.command()
def version() -> None:
    """Display version information."""
    console.print(f"pr-extract version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
