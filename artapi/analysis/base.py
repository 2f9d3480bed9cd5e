from abc import ABC, abstractmethod

from artapi.analysis.models import AnalysisResult
from artapi.concurrency.cancel_scope import CancelScope


class BaseAnalyzer(ABC):
    """Contract for all image analysis adapters."""

    @abstractmethod
    def analyze_image(
        self, data: bytes, scope: CancelScope | None = None
    ) -> AnalysisResult:
        """Produce a short title and a few tags for an image.

        Args:
            data: Raw image bytes.
            scope: Checked before the remote call starts; a cancelled scope
                aborts with OperationCancelledError.

        Returns:
            AnalysisResult with a non-empty title and at least one tag.

        Raises:
            AnalysisNetworkError: the provider could not be reached or failed.
            AnalysisResponseError: the reply was not in the expected shape.
        """
