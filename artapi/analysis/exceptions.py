class AnalysisError(Exception):
    """Raised when image analysis fails."""


class AnalysisResponseError(AnalysisError):
    """Raised when the AI reply cannot be parsed into a title and tags."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
