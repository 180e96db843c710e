"""Local mirror of the remote post collection.

The SyncStore holds the ordered cache of posts and mediates every create,
update and delete against the remote collection. Local state only changes
after the remote side acknowledges a write, so a failed request leaves the
cache exactly as it was.
"""

import logging
from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime
from typing import Any

from ..errors import (
    DuplicateId,
    DuplicateTitle,
    InvalidId,
    InvalidTitle,
    NotFound,
    RemoteError,
    RemoteUnavailable,
    RemoteWriteFailed,
)
from ..remote import RemoteCollection
from .record import Record

logger = logging.getLogger(__name__)


class SyncStore:
    """Ordered cache of posts kept in step with a remote collection.

    Validation reads the local cache only. Two calls started without
    awaiting each other can both pass validation before either remote
    write resolves; the store does not serialize them.

    Records handed to callers are copies; mutating them does not touch
    the cache.
    """

    def __init__(self, remote: RemoteCollection):
        """Initialize the store.

        Args:
            remote: Client for the remote post collection.
        """
        self.remote = remote
        self._records: list[Record] = []
        self._last_load: datetime | None = None

    @property
    def records(self) -> tuple[Record, ...]:
        """Copies of the current posts in display order."""
        return tuple(replace(r) for r in self._records)

    @property
    def last_load(self) -> datetime | None:
        """Timestamp of the last successful load."""
        return self._last_load

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def _find(self, remote_key: str) -> Record | None:
        for record in self._records:
            if record.remote_key == remote_key:
                return record
        return None

    def get(self, remote_key: str) -> Record | None:
        """Find a cached post by its remote key."""
        record = self._find(remote_key)
        return replace(record) if record else None

    @staticmethod
    def _check_id(post_id: int) -> None:
        # bool is an int subclass but never a valid id
        if not isinstance(post_id, int) or isinstance(post_id, bool):
            raise InvalidId(post_id)

    @staticmethod
    def _check_title(title: str) -> None:
        if not isinstance(title, str) or not title.strip():
            raise InvalidTitle(title)

    async def load(self) -> list[Record]:
        """Replace the cache with the full remote collection.

        Sub-documents without a usable id or title are skipped with a
        warning rather than failing the load.

        Returns:
            The freshly loaded posts.

        Raises:
            RemoteUnavailable: If the collection could not be fetched. The
                cache is left untouched.
        """
        try:
            documents = await self.remote.get_all()
        except RemoteError as e:
            logger.warning(f"Failed to load posts: {e}")
            raise RemoteUnavailable(e.detail or str(e), e.status_code) from e

        loaded = []
        for key, document in documents.items():
            try:
                loaded.append(Record.from_remote(key, document))
            except RemoteError as e:
                logger.warning(f"Skipping post {key}: {e}")

        self._records = loaded
        self._last_load = datetime.now()
        logger.info(f"Loaded {len(loaded)} posts")
        return [replace(r) for r in loaded]

    async def create(self, post_id: int, title: str) -> Record:
        """Create a post remotely and append it to the cache.

        Args:
            post_id: Caller-assigned id, unique among cached posts.
            title: Title, unique among cached posts.

        Returns:
            The created post, carrying its remote key.

        Raises:
            InvalidId: If the id is not an integer.
            InvalidTitle: If the title is blank.
            DuplicateId: If a cached post already has this id.
            DuplicateTitle: If a cached post already has this title.
            RemoteWriteFailed: If the remote rejected the create.
        """
        self._check_id(post_id)
        self._check_title(title)
        if any(r.id == post_id for r in self._records):
            raise DuplicateId(post_id)
        if any(r.title == title for r in self._records):
            raise DuplicateTitle(title)

        # Pending until the remote hands back a key
        document = {"id": post_id, "title": title}

        try:
            remote_key = await self.remote.create(document)
        except RemoteError as e:
            logger.warning(f"Failed to create post {post_id}: {e}")
            raise RemoteWriteFailed("save", e.detail or str(e), e.status_code) from e

        record = Record(id=post_id, title=title, remote_key=remote_key)
        self._records.append(record)
        logger.info(f"Created post {post_id} as {remote_key}")
        return replace(record)

    async def update(self, remote_key: str, new_title: str) -> Record:
        """Change a post's title remotely, then in the cache.

        Args:
            remote_key: Remote key of the post.
            new_title: Replacement title, unique among the other posts.

        Returns:
            The updated post.

        Raises:
            InvalidTitle: If the title is blank.
            DuplicateTitle: If another cached post already has this title.
            NotFound: If no cached post has this remote key.
            RemoteWriteFailed: If the remote rejected the update.
        """
        self._check_title(new_title)
        if any(
            r.remote_key != remote_key and r.title == new_title
            for r in self._records
        ):
            raise DuplicateTitle(new_title)
        if self._find(remote_key) is None:
            raise NotFound(remote_key)

        try:
            await self.remote.update(remote_key, {"title": new_title})
        except RemoteError as e:
            logger.warning(f"Failed to update post {remote_key}: {e}")
            raise RemoteWriteFailed("update", e.detail or str(e), e.status_code) from e

        record = self._find(remote_key)
        if record is None:
            logger.warning(f"Post {remote_key} was removed while its update was in flight")
            raise NotFound(remote_key)

        record.title = new_title
        logger.info(f"Updated post {record.id} ({remote_key})")
        return replace(record)

    async def delete(self, remote_key: str) -> Record:
        """Delete a post remotely, then drop it from the cache.

        Args:
            remote_key: Remote key of the post.

        Returns:
            The removed post.

        Raises:
            NotFound: If no cached post has this remote key.
            RemoteWriteFailed: If the remote rejected the delete.
        """
        record = self._find(remote_key)
        if record is None:
            raise NotFound(remote_key)

        try:
            await self.remote.delete(remote_key)
        except RemoteError as e:
            logger.warning(f"Failed to delete post {remote_key}: {e}")
            raise RemoteWriteFailed("delete", e.detail or str(e), e.status_code) from e

        self._records = [r for r in self._records if r.remote_key != remote_key]
        logger.info(f"Deleted post {record.id} ({remote_key})")
        return record

    def get_status(self) -> dict[str, Any]:
        """Get current store status.

        Returns:
            Dictionary with cache statistics.
        """
        return {
            "remote_url": self.remote.base_url,
            "collection": self.remote.collection,
            "loaded": self._last_load is not None,
            "last_load": self._last_load.isoformat() if self._last_load else None,
            "post_count": len(self._records),
        }
