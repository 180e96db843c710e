"""Web dashboard for postsync.

Provides a web interface for listing, adding, updating and deleting posts
using FastAPI and HTMX.
"""

from .app import create_app

__all__ = ["create_app"]
