import pytest

from artapi.storage.memory_adapter import InMemoryStorageAdapter
from fakes import PNG_SIGNATURE, FakeClock


@pytest.fixture()
def sample_png_bytes() -> bytes:
    """PNG signature followed by filler; enough for MIME sniffing and storage."""
    return PNG_SIGNATURE + b"\x00" * 64


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_storage() -> InMemoryStorageAdapter:
    return InMemoryStorageAdapter(bucket_name="test-bucket")
