"""Template data extractors."""

from pr_extract.extractors.base import BaseExtractor
from pr_extract.extractors.pr_extractor import ExtractionStage, PRExtractor, build_pr_data

__all__ = ["BaseExtractor", "ExtractionStage", "PRExtractor", "build_pr_data"]
