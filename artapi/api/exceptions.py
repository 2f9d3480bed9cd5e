class ImageValidationError(Exception):
    """Raised when the uploaded image is missing, unreadable, empty, or too large.

    The message is safe to return to the client.
    """


class RateLimitExceededError(Exception):
    """Raised when a client submits again before its cooldown window has passed."""

    def __init__(self, identity: str, retry_after_seconds: int) -> None:
        super().__init__(f"Rate limit exceeded for {identity}")
        self.identity = identity
        self.retry_after_seconds = retry_after_seconds
