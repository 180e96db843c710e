"""Exceptions raised by the post store and its remote collection."""


class PostSyncError(Exception):
    """Base exception for postsync errors."""

    pass


class ValidationError(PostSyncError):
    """Raised when a local precondition rejects an operation.

    Validation runs against the local cache before any remote call, so
    these errors never leave a side effect behind.
    """

    pass


class DuplicateId(ValidationError):
    """Raised when a create collides with an existing post id."""

    def __init__(self, post_id: int):
        super().__init__("ID already exists!")
        self.post_id = post_id


class DuplicateTitle(ValidationError):
    """Raised when a create or update collides with another post's title."""

    def __init__(self, title: str):
        super().__init__("Title already exists!")
        self.title = title


class NotFound(ValidationError):
    """Raised when a remote key does not address any cached post."""

    def __init__(self, remote_key: str):
        super().__init__(f"Post {remote_key!r} not found")
        self.remote_key = remote_key


class InvalidId(ValidationError):
    """Raised when a post id is not an integer."""

    def __init__(self, post_id: object):
        super().__init__(f"ID must be a whole number, got {post_id!r}")
        self.post_id = post_id


class InvalidTitle(ValidationError):
    """Raised when a title is empty or whitespace only."""

    def __init__(self, title: str):
        super().__init__("Title must not be empty")
        self.title = title


class RemoteError(PostSyncError):
    """Raised when the remote collection fails a request.

    Transport errors and non-success statuses collapse into this one type.
    """

    def __init__(
        self,
        detail: str | None = None,
        status_code: int | None = None,
        message: str | None = None,
    ):
        super().__init__(message or detail or "Remote request failed")
        self.detail = detail
        self.status_code = status_code


class RemoteUnavailable(RemoteError):
    """Raised when the remote collection cannot be loaded."""

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        super().__init__(
            detail,
            status_code,
            message=f"Failed to load posts: {detail or 'remote unavailable'}",
        )


class RemoteWriteFailed(RemoteError):
    """Raised when a create, update or delete is rejected by the remote."""

    def __init__(
        self,
        operation: str,
        detail: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            detail,
            status_code,
            message=f"Failed to {operation} post: {detail or 'unknown error'}",
        )
        self.operation = operation
