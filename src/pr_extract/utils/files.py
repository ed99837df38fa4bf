"""File system helpers used to persist extracted artifacts."""

from pathlib import Path
from typing import Union

from pr_extract.utils.logging import FileWriteError, get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def ensure_directory_exists(path: PathLike) -> Path:
    """Create a directory (and parents) if it does not exist yet.

    Safe to call repeatedly.

    Args:
        path: Directory to create.

    Returns:
        Path: The directory path.

    Raises:
        FileWriteError: If the directory cannot be created.
    """
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory {directory}: {e}")
        raise FileWriteError(
            f"Failed to create directory: {directory}",
            path=str(directory),
            details=str(e),
        ) from e
    return directory


def write_file(path: PathLike, content: str) -> Path:
    """Write text content to a file, replacing any existing content.

    Args:
        path: Destination file.
        content: Text to write (UTF-8).

    Returns:
        Path: The written file path.

    Raises:
        FileWriteError: If the file cannot be written.
    """
    target = Path(path)
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write file {target}: {e}")
        raise FileWriteError(
            f"Failed to write file: {target}",
            path=str(target),
            details=str(e),
        ) from e
    return target
