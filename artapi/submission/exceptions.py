class SubmissionError(Exception):
    """Base exception for all submission pipeline failures.

    The collaborator error that caused the failure is kept as __cause__.
    """


class StorageWriteFailedError(SubmissionError):
    """Raised when saving the image to object storage fails."""


class AnalysisFailedError(SubmissionError):
    """Raised when the AI analysis call fails."""


class AnalysisResponseMalformedError(SubmissionError):
    """Raised when the AI reply cannot be parsed into a title and tags."""


class MetadataWriteFailedError(SubmissionError):
    """Raised when attaching metadata to the stored image fails."""


class SubmissionTimeoutError(SubmissionError):
    """Raised when the branches do not both finish before the deadline."""


class SubmissionCancelledError(SubmissionError):
    """Raised when the request is cancelled while the branches are running."""
