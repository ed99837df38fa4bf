"""Base class for template data extractors."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from pr_extract.models.context import ActionInputs
from pr_extract.utils.logging import get_logger

logger = get_logger(__name__)

# Type variable for extractor output
T = TypeVar("T")


class BaseExtractor(ABC, Generic[T]):
    """Abstract base class for extractors.

    An extractor decides from the inputs whether it applies, and if so
    produces one piece of template data.

    Subclasses must implement:
    - should_extract(): Applicability predicate, free of side effects
    - perform_extraction(): The extraction itself
    """

    def __init__(self, name: str) -> None:
        """Initialize the extractor.

        Args:
            name: Human readable name used in log messages
        """
        self.name = name

    @abstractmethod
    def should_extract(self, inputs: ActionInputs) -> bool:
        """Return True when the inputs carry enough data to extract."""
        ...

    @abstractmethod
    async def perform_extraction(self, inputs: ActionInputs) -> T:
        """Extract the data.

        Args:
            inputs: Extraction inputs, already accepted by should_extract

        Returns:
            Extracted data
        """
        ...

    async def extract(self, inputs: ActionInputs) -> Optional[T]:
        """Run the extraction if it applies to the inputs.

        Args:
            inputs: Extraction inputs

        Returns:
            Extracted data, or None when the extractor does not apply

        Raises:
            Exception: Whatever perform_extraction raised, unchanged
        """
        if not self.should_extract(inputs):
            logger.debug(f"Skipping {self.name} extraction: inputs not available")
            return None

        logger.info(f"Extracting {self.name}")
        try:
            result = await self.perform_extraction(inputs)
        except Exception as e:
            logger.error(f"{self.name} extraction failed: {e}")
            raise

        logger.debug(f"{self.name} extraction succeeded")
        return result
