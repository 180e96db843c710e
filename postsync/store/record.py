"""Post record type."""

from dataclasses import dataclass
from typing import Any

from ..errors import RemoteError


@dataclass
class Record:
    """A post mirrored from the remote collection.

    ``id`` and ``remote_key`` never change after creation; only ``title``
    is updated in place.
    """

    id: int
    title: str
    remote_key: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the remote sub-document shape."""
        return {"id": self.id, "title": self.title}

    @classmethod
    def from_remote(cls, remote_key: str, document: Any) -> "Record":
        """Build a Record from a remote key and its sub-document.

        Raises:
            RemoteError: If the sub-document lacks a usable id or title.
        """
        if not isinstance(document, dict):
            raise RemoteError(f"Malformed post {remote_key!r}: not an object")

        post_id = document.get("id")
        title = document.get("title")

        # bool is an int subclass but never a valid id
        if not isinstance(post_id, int) or isinstance(post_id, bool):
            raise RemoteError(f"Malformed post {remote_key!r}: bad id {post_id!r}")
        if not isinstance(title, str):
            raise RemoteError(f"Malformed post {remote_key!r}: bad title {title!r}")

        return cls(id=post_id, title=title, remote_key=remote_key)
