"""Shared fixtures for daybook tests."""

from datetime import datetime

import pytest

from daybook.errors import PersistenceFailure
from daybook.store.blobs import BlobStore


class MemoryBlobStore(BlobStore):
    """Dict-backed blob store that can be told to fail writes."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.fail_writes = False
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceFailure(f"Could not write '{key}': disk full")
        self.writes += 1
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise PersistenceFailure(f"Could not write '{key}': disk full")
        self.data.pop(key, None)


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def now() -> datetime:
    # Wednesday
    return datetime(2024, 1, 10, 15, 30)
