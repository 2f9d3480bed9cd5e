from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from minio.commonconfig import REPLACE
from minio.error import MinioException, S3Error

from artapi.storage.exceptions import ObjectNotFoundError, StorageTransportError
from artapi.storage.minio_adapter import MinioStorageAdapter, user_metadata
from artapi.storage.models import ArtworkMetadata


def _s3_error(code: str) -> S3Error:
    return S3Error(code, "message", "/bucket/object", "request-id", "host-id", MagicMock())


def _listed(name: str, is_dir: bool = False) -> MagicMock:
    return MagicMock(object_name=name, is_dir=is_dir)


def _stat(favorite: bool, title: str = "Dusk") -> MagicMock:
    return MagicMock(
        metadata={
            "Content-Type": "image/png",
            "X-Amz-Meta-Title": title,
            "X-Amz-Meta-Tags": "x,y,z",
            "X-Amz-Meta-Isfavorite": "true" if favorite else "false",
            "X-Amz-Meta-Uploadedat": "2024-05-01T12:00:00Z",
        }
    )


def _make_adapter(client: MagicMock) -> MinioStorageAdapter:
    return MinioStorageAdapter(
        client=client, bucket_name="art", signed_url_ttl=timedelta(minutes=30)
    )


class TestUserMetadata:
    def test_strips_prefix_and_drops_other_headers(self) -> None:
        headers = {"x-amz-meta-title": "Dusk", "Content-Length": "3"}
        assert user_metadata(headers) == {"title": "Dusk"}


class TestSave:
    def test_puts_png_object(self) -> None:
        client = MagicMock()
        object_id = _make_adapter(client).save(b"abc")
        kwargs = client.put_object.call_args.kwargs
        assert object_id.endswith(".png")
        assert kwargs["bucket_name"] == "art"
        assert kwargs["object_name"] == object_id
        assert kwargs["length"] == 3
        assert kwargs["data"].read() == b"abc"
        assert kwargs["content_type"] == "image/png"

    def test_transport_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.put_object.side_effect = MinioException("unreachable")
        with pytest.raises(StorageTransportError):
            _make_adapter(client).save(b"abc")


class TestSetMetadata:
    def test_copies_object_with_replaced_metadata(self) -> None:
        client = MagicMock()
        metadata = ArtworkMetadata(title="Dusk", tags="x,y", uploaded_at="2024-05-01T12:00:00Z")

        _make_adapter(client).set_metadata("abc.png", metadata)

        kwargs = client.copy_object.call_args.kwargs
        assert kwargs["bucket_name"] == "art"
        assert kwargs["object_name"] == "abc.png"
        assert kwargs["metadata_directive"] == REPLACE
        assert kwargs["metadata"]["title"] == "Dusk"
        assert kwargs["metadata"]["isFavorite"] == "false"
        assert kwargs["metadata"]["Content-Type"] == "image/png"

    def test_missing_object_raises_not_found(self) -> None:
        client = MagicMock()
        client.stat_object.side_effect = _s3_error("NoSuchKey")
        with pytest.raises(ObjectNotFoundError):
            _make_adapter(client).set_metadata("abc.png", ArtworkMetadata(title="t", tags="a"))
        client.copy_object.assert_not_called()

    def test_other_s3_error_is_transport_error(self) -> None:
        client = MagicMock()
        client.stat_object.side_effect = _s3_error("AccessDenied")
        with pytest.raises(StorageTransportError):
            _make_adapter(client).set_metadata("abc.png", ArtworkMetadata(title="t", tags="a"))


class TestSignedUrl:
    def test_uses_configured_ttl(self) -> None:
        client = MagicMock()
        client.presigned_get_object.return_value = "https://signed"
        assert _make_adapter(client).get_signed_url("abc.png") == "https://signed"
        client.presigned_get_object.assert_called_once_with(
            bucket_name="art", object_name="abc.png", expires=timedelta(minutes=30)
        )


class TestListFavorites:
    def test_returns_favorites_with_signed_urls(self) -> None:
        client = MagicMock()
        client.list_objects.return_value = [_listed("a.png"), _listed("b.png"), _listed("dir/", True)]
        client.stat_object.side_effect = lambda bucket_name, object_name: {
            "a.png": _stat(favorite=True),
            "b.png": _stat(favorite=False),
        }[object_name]
        client.presigned_get_object.return_value = "https://signed"

        pieces = _make_adapter(client).list_favorites()

        assert [p.id for p in pieces] == ["a.png"]
        assert pieces[0].url == "https://signed"
        assert pieces[0].tags == ["x", "y", "z"]
        client.list_objects.assert_called_once_with(bucket_name="art", recursive=True)

    def test_skips_object_when_signing_fails(self) -> None:
        client = MagicMock()
        client.list_objects.return_value = [_listed("a.png"), _listed("b.png")]
        client.stat_object.return_value = _stat(favorite=True)
        client.presigned_get_object.side_effect = [MinioException("no creds"), "https://signed"]

        pieces = _make_adapter(client).list_favorites()

        assert [p.id for p in pieces] == ["b.png"]

    def test_skips_object_deleted_during_listing(self) -> None:
        client = MagicMock()
        client.list_objects.return_value = [_listed("gone.png")]
        client.stat_object.side_effect = _s3_error("NoSuchKey")
        assert _make_adapter(client).list_favorites() == []

    def test_iteration_failure_raises(self) -> None:
        client = MagicMock()
        client.list_objects.side_effect = MinioException("unreachable")
        with pytest.raises(StorageTransportError, match="Failed to iterate objects"):
            _make_adapter(client).list_favorites()
