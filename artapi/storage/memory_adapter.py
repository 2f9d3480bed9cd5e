import threading
import time
import uuid
from dataclasses import dataclass, field

from artapi.concurrency.cancel_scope import CancelScope
from artapi.logging.logger import Log
from artapi.storage.base import BaseStorageProvider
from artapi.storage.exceptions import ObjectNotFoundError
from artapi.storage.models import ArtPiece, ArtworkMetadata


@dataclass
class StoredObject:
    data: bytes
    metadata: dict[str, str] = field(default_factory=dict)


class InMemoryStorageAdapter(BaseStorageProvider):
    """Process-local object store for development and tests.

    Signed URLs use a memory:// scheme and are not fetchable over HTTP.
    """

    def __init__(self, *, bucket_name: str = "local", signed_url_ttl_seconds: int = 3600) -> None:
        self._bucket = bucket_name
        self._ttl = signed_url_ttl_seconds
        self._lock = threading.Lock()
        self._objects: dict[str, StoredObject] = {}

    def save(self, data: bytes, scope: CancelScope | None = None) -> str:
        if scope is not None:
            scope.raise_if_cancelled()
        object_id = f"{uuid.uuid4()}.png"
        with self._lock:
            self._objects[object_id] = StoredObject(data=bytes(data))
        return object_id

    def set_metadata(self, object_id: str, metadata: ArtworkMetadata) -> None:
        with self._lock:
            stored = self._objects.get(object_id)
            if stored is None:
                raise ObjectNotFoundError(f"Object not found: {object_id}")
            stored.metadata = metadata.to_object_metadata()

    def get_signed_url(self, object_id: str) -> str:
        with self._lock:
            if object_id not in self._objects:
                raise ObjectNotFoundError(f"Object not found: {object_id}")
        expires = int(time.time()) + self._ttl
        return f"memory://{self._bucket}/{object_id}?expires={expires}"

    def list_favorites(self) -> list[ArtPiece]:
        with self._lock:
            snapshot = [(object_id, dict(obj.metadata)) for object_id, obj in self._objects.items()]

        pieces: list[ArtPiece] = []
        for object_id, raw in snapshot:
            metadata = ArtworkMetadata.from_object_metadata(raw)
            if not metadata.favorited:
                continue
            try:
                url = self.get_signed_url(object_id)
            except ObjectNotFoundError as exc:
                Log.warning(f"Skipping {object_id}: {exc}")
                continue
            pieces.append(ArtPiece.from_metadata(object_id, url, metadata))
        return pieces

    def get_object(self, object_id: str) -> StoredObject:
        """Return the stored bytes and raw metadata of one object."""
        with self._lock:
            stored = self._objects.get(object_id)
        if stored is None:
            raise ObjectNotFoundError(f"Object not found: {object_id}")
        return stored

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
