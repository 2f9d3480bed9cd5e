from datetime import timedelta

from artapi.config.settings import Settings
from artapi.storage.base import BaseStorageProvider
from artapi.storage.memory_adapter import InMemoryStorageAdapter
from artapi.storage.minio_adapter import MinioStorageAdapter


class StorageFactory:
    """Creates the configured object storage adapter."""

    PROVIDERS = ("memory", "minio")

    @classmethod
    def create(cls, settings: Settings) -> BaseStorageProvider:
        provider = settings.storage_provider.lower()
        if provider == "memory":
            return InMemoryStorageAdapter(
                bucket_name=settings.storage_bucket_name,
                signed_url_ttl_seconds=settings.storage_signed_url_ttl_seconds,
            )
        if provider == "minio":
            return MinioStorageAdapter.connect(
                endpoint=settings.storage_endpoint,
                access_key=settings.storage_access_key,
                secret_key=settings.storage_secret_key,
                bucket_name=settings.storage_bucket_name,
                secure=settings.storage_secure,
                region=settings.storage_region,
                signed_url_ttl=timedelta(seconds=settings.storage_signed_url_ttl_seconds),
            )
        raise ValueError(
            f"Unknown storage provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
