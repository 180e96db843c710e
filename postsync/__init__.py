"""postsync - a post list kept in sync with a remote document store."""

from .errors import (
    DuplicateId,
    DuplicateTitle,
    InvalidId,
    InvalidTitle,
    NotFound,
    PostSyncError,
    RemoteError,
    RemoteUnavailable,
    RemoteWriteFailed,
    ValidationError,
)
from .remote import RemoteCollection
from .store import Record, SyncStore

__version__ = "0.1.0"

__all__ = [
    "DuplicateId",
    "DuplicateTitle",
    "InvalidId",
    "InvalidTitle",
    "NotFound",
    "PostSyncError",
    "Record",
    "RemoteCollection",
    "RemoteError",
    "RemoteUnavailable",
    "RemoteWriteFailed",
    "SyncStore",
    "ValidationError",
]
