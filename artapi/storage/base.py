from abc import ABC, abstractmethod

from artapi.concurrency.cancel_scope import CancelScope
from artapi.storage.models import ArtPiece, ArtworkMetadata


class BaseStorageProvider(ABC):
    """Contract for object storage adapters."""

    @abstractmethod
    def save(self, data: bytes, scope: CancelScope | None = None) -> str:
        """Durably store image bytes under a fresh, never reused object id.

        Raises:
            StorageTransportError: the write failed.
            OperationCancelledError: the scope was cancelled before the write started.
        """

    @abstractmethod
    def set_metadata(self, object_id: str, metadata: ArtworkMetadata) -> None:
        """Replace the application metadata of an existing object.

        Raises:
            ObjectNotFoundError: no object with that id.
            StorageTransportError: the update failed.
        """

    @abstractmethod
    def get_signed_url(self, object_id: str) -> str:
        """Issue a time-limited read URL for an object."""

    @abstractmethod
    def list_favorites(self) -> list[ArtPiece]:
        """Return every stored object marked as favorite, in store order.

        Objects whose URL cannot be signed are skipped; any other failure raises.
        """

    def close(self) -> None:
        """Release client resources."""
