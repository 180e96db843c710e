"""Shared fixtures for postsync tests."""

from typing import Any

import pytest

from postsync.errors import RemoteError
from postsync.store import SyncStore


class FakeRemote:
    """In-memory stand-in for RemoteCollection.

    Keys are minted in order ("K1", "K2", ...). Setting ``fail`` makes the
    next requests raise it.
    """

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None):
        self.base_url = "https://fake.example"
        self.collection = "posts"
        self.documents: dict[str, dict[str, Any]] = dict(documents or {})
        self.calls: list[tuple[str, ...]] = []
        self.fail: RemoteError | None = None
        self._next_key = len(self.documents) + 1

    def _maybe_fail(self) -> None:
        if self.fail is not None:
            raise self.fail

    async def get_all(self) -> dict[str, dict[str, Any]]:
        self.calls.append(("get_all",))
        self._maybe_fail()
        return {key: dict(doc) for key, doc in self.documents.items()}

    async def create(self, document: dict[str, Any]) -> str:
        self.calls.append(("create", document["id"], document["title"]))
        self._maybe_fail()
        key = f"K{self._next_key}"
        self._next_key += 1
        self.documents[key] = dict(document)
        return key

    async def update(self, remote_key: str, fields: dict[str, Any]) -> None:
        self.calls.append(("update", remote_key, fields["title"]))
        self._maybe_fail()
        self.documents.setdefault(remote_key, {}).update(fields)

    async def delete(self, remote_key: str) -> None:
        self.calls.append(("delete", remote_key))
        self._maybe_fail()
        self.documents.pop(remote_key, None)

    async def close(self) -> None:
        pass


@pytest.fixture
def remote():
    """Empty fake remote collection."""
    return FakeRemote()


@pytest.fixture
def seeded_remote():
    """Fake remote holding two posts."""
    return FakeRemote(
        {
            "K1": {"id": 1, "title": "Hello"},
            "K2": {"id": 2, "title": "World"},
        }
    )


@pytest.fixture
def store(remote):
    """SyncStore over the empty fake remote."""
    return SyncStore(remote)


@pytest.fixture
def seeded_store(seeded_remote):
    """SyncStore over the two-post fake remote (not yet loaded)."""
    return SyncStore(seeded_remote)
