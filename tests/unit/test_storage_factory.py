from datetime import timedelta
from unittest.mock import patch

import pytest

from artapi.config.settings import Settings
from artapi.storage.factory import StorageFactory
from artapi.storage.memory_adapter import InMemoryStorageAdapter


class TestStorageFactory:
    def test_creates_memory_adapter(self) -> None:
        storage = StorageFactory.create(Settings(storage_provider="memory"))
        assert isinstance(storage, InMemoryStorageAdapter)

    def test_connects_minio_adapter_with_settings(self) -> None:
        settings = Settings(
            storage_provider="minio",
            storage_endpoint="localhost:9000",
            storage_access_key="ak",
            storage_secret_key="sk",
            storage_bucket_name="art",
            storage_secure=False,
            storage_signed_url_ttl_seconds=600,
        )
        with patch("artapi.storage.factory.MinioStorageAdapter.connect") as mock_connect:
            StorageFactory.create(settings)
        mock_connect.assert_called_once_with(
            endpoint="localhost:9000",
            access_key="ak",
            secret_key="sk",
            bucket_name="art",
            secure=False,
            region=None,
            signed_url_ttl=timedelta(seconds=600),
        )

    def test_provider_name_is_case_insensitive(self) -> None:
        storage = StorageFactory.create(Settings(storage_provider="MEMORY"))
        assert isinstance(storage, InMemoryStorageAdapter)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown storage provider"):
            StorageFactory.create(Settings(storage_provider="gcs"))
