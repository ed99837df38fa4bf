"""pr-extract: pull request data extraction for review templates."""

__version__ = "0.1.0"
