"""Remote document store access."""

from .collection import RemoteCollection

__all__ = ["RemoteCollection"]
