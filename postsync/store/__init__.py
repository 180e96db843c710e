"""Post records and the synchronized local store."""

from .record import Record
from .sync_store import SyncStore

__all__ = ["Record", "SyncStore"]
