import io
import uuid
from collections.abc import Mapping
from datetime import timedelta

import urllib3
from minio import Minio
from minio.commonconfig import REPLACE, CopySource
from minio.datatypes import Object
from minio.error import MinioException, S3Error

from artapi.concurrency.cancel_scope import CancelScope
from artapi.logging.logger import Log
from artapi.storage.base import BaseStorageProvider
from artapi.storage.exceptions import ObjectNotFoundError, StorageTransportError
from artapi.storage.models import ArtPiece, ArtworkMetadata

_USER_METADATA_PREFIX = "x-amz-meta-"
_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchObject"})

# Errors the minio client raises for remote failures and unreachable endpoints.
_TRANSPORT_ERRORS = (MinioException, urllib3.exceptions.HTTPError)


def user_metadata(headers: Mapping[str, str]) -> dict[str, str]:
    """Extract user metadata from object headers, dropping the x-amz-meta- prefix."""
    return {
        key[len(_USER_METADATA_PREFIX):]: value
        for key, value in headers.items()
        if key.lower().startswith(_USER_METADATA_PREFIX)
    }


class MinioStorageAdapter(BaseStorageProvider):
    """Object storage on any S3-compatible service (MinIO, AWS S3, GCS interop)."""

    CONTENT_TYPE = "image/png"

    def __init__(
        self,
        *,
        client: Minio,
        bucket_name: str,
        signed_url_ttl: timedelta = timedelta(hours=1),
    ) -> None:
        self._client = client
        self._bucket = bucket_name
        self._signed_url_ttl = signed_url_ttl

    @classmethod
    def connect(
        cls,
        *,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket_name: str,
        secure: bool = True,
        region: str | None = None,
        signed_url_ttl: timedelta = timedelta(hours=1),
    ) -> "MinioStorageAdapter":
        client = Minio(
            endpoint,
            access_key=access_key or None,
            secret_key=secret_key or None,
            secure=secure,
            region=region,
        )
        return cls(client=client, bucket_name=bucket_name, signed_url_ttl=signed_url_ttl)

    def save(self, data: bytes, scope: CancelScope | None = None) -> str:
        if scope is not None:
            scope.raise_if_cancelled()
        object_id = f"{uuid.uuid4()}.png"
        try:
            self._client.put_object(
                bucket_name=self._bucket,
                object_name=object_id,
                data=io.BytesIO(data),
                length=len(data),
                content_type=self.CONTENT_TYPE,
            )
        except _TRANSPORT_ERRORS as exc:
            raise StorageTransportError(f"Failed to write {object_id}: {exc}") from exc
        Log.info(f"Stored object {object_id} ({len(data)} bytes)")
        return object_id

    def set_metadata(self, object_id: str, metadata: ArtworkMetadata) -> None:
        self._stat(object_id)
        headers: dict[str, str] = {
            "Content-Type": self.CONTENT_TYPE,
            **metadata.to_object_metadata(),
        }
        try:
            self._client.copy_object(
                bucket_name=self._bucket,
                object_name=object_id,
                source=CopySource(self._bucket, object_id),
                metadata=headers,
                metadata_directive=REPLACE,
            )
        except _TRANSPORT_ERRORS as exc:
            raise StorageTransportError(
                f"Failed to update metadata of {object_id}: {exc}"
            ) from exc

    def get_signed_url(self, object_id: str) -> str:
        try:
            return self._client.presigned_get_object(
                bucket_name=self._bucket,
                object_name=object_id,
                expires=self._signed_url_ttl,
            )
        except _TRANSPORT_ERRORS as exc:
            raise StorageTransportError(
                f"Failed to generate signed URL for {object_id}: {exc}"
            ) from exc

    def list_favorites(self) -> list[ArtPiece]:
        pieces: list[ArtPiece] = []
        object_count = 0
        favorite_count = 0
        try:
            for obj in self._client.list_objects(bucket_name=self._bucket, recursive=True):
                if obj.is_dir or obj.object_name is None:
                    continue
                object_count += 1
                object_id = obj.object_name
                try:
                    metadata = self._read_metadata(object_id)
                except ObjectNotFoundError:
                    Log.debug(f"Object {object_id} disappeared during listing")
                    continue
                if not metadata.favorited:
                    continue
                favorite_count += 1
                try:
                    url = self.get_signed_url(object_id)
                except StorageTransportError as exc:
                    Log.warning(f"Skipping {object_id}: {exc}")
                    continue
                pieces.append(ArtPiece.from_metadata(object_id, url, metadata))
        except _TRANSPORT_ERRORS as exc:
            raise StorageTransportError(f"Failed to iterate objects: {exc}") from exc

        Log.info(
            f"Listed favorites: {object_count} objects, {favorite_count} favorites, "
            f"{len(pieces)} returned"
        )
        return pieces

    def _read_metadata(self, object_id: str) -> ArtworkMetadata:
        stat = self._stat(object_id)
        return ArtworkMetadata.from_object_metadata(user_metadata(stat.metadata or {}))

    def _stat(self, object_id: str) -> Object:
        try:
            return self._client.stat_object(bucket_name=self._bucket, object_name=object_id)
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                raise ObjectNotFoundError(f"Object not found: {object_id}") from exc
            raise StorageTransportError(f"Failed to stat {object_id}: {exc}") from exc
        except _TRANSPORT_ERRORS as exc:
            raise StorageTransportError(f"Failed to stat {object_id}: {exc}") from exc
