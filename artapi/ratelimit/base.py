from abc import ABC, abstractmethod


class BaseRateLimiter(ABC):
    """Contract for submission gates keyed by client identity."""

    @abstractmethod
    def allow(self, identity: str) -> bool:
        """Return True if the identity may submit now, recording the submission.

        A denied call must not change the identity's state.
        """

    def stop(self) -> None:
        """Release background resources. No-op unless the limiter owns any."""
