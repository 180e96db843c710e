"""HTTP client for a remote key-value document collection.

Talks to a Firebase Realtime Database style REST endpoint: the collection
lives at ``<base>/<collection>.json`` and each record at
``<base>/<collection>/<key>.json``.
"""

import logging
from typing import Any

import httpx

from ..errors import RemoteError

logger = logging.getLogger(__name__)


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"Request: {request.method} {request.url}")


async def _log_response(response: httpx.Response) -> None:
    logger.debug(f"Response: {response.status_code} {response.reason_phrase}")


def _error_detail(response: httpx.Response) -> str:
    """Extract a human-readable error from a failed response.

    Prefers the ``error`` field of a JSON object body, falling back to the
    status line.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])

    return f"HTTP {response.status_code} {response.reason_phrase}".strip()


class RemoteCollection:
    """Client for one collection in a remote document store.

    Every failure, whether a transport error or a non-success status,
    surfaces as a RemoteError carrying an optional detail string.
    """

    def __init__(
        self,
        base_url: str,
        collection: str = "posts",
        suffix: str = ".json",
        timeout: float = 10.0,
    ):
        """Initialize the collection client.

        Args:
            base_url: Base URL of the document store.
            collection: Name of the collection under the base URL.
            suffix: Suffix appended to every path (".json" for Firebase).
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.collection = collection.strip("/")
        self.suffix = suffix
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def collection_path(self) -> str:
        return f"/{self.collection}{self.suffix}"

    def record_path(self, remote_key: str) -> str:
        return f"/{self.collection}/{remote_key}{self.suffix}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                event_hooks={
                    "request": [_log_request],
                    "response": [_log_response],
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RemoteCollection":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            json_data: Optional JSON body.

        Returns:
            Decoded JSON body, or None for an empty body.

        Raises:
            RemoteError: On transport failure or non-success status.
        """
        if not self.base_url:
            raise RemoteError("No remote URL configured")

        client = await self._get_client()

        try:
            if json_data is None:
                response = await client.request(method, path)
            else:
                response = await client.request(method, path, json=json_data)
        except httpx.TimeoutException as e:
            raise RemoteError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise RemoteError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise RemoteError(_error_detail(response), response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(
                f"Invalid JSON response: {e}", response.status_code
            ) from e

    async def get_all(self) -> dict[str, dict[str, Any]]:
        """Fetch the whole collection.

        Returns:
            Mapping of remote key to sub-document, in response order.
            An empty or absent collection yields an empty dict.
        """
        data = await self._request("GET", self.collection_path)

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise RemoteError(
                f"Unexpected collection payload: {type(data).__name__}"
            )

        return data

    async def create(self, document: dict[str, Any]) -> str:
        """Add a document to the collection.

        Args:
            document: The document body.

        Returns:
            The key generated by the remote store.
        """
        data = await self._request("POST", self.collection_path, document)

        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name:
            raise RemoteError("Create response did not include a generated key")

        return name

    async def update(self, remote_key: str, fields: dict[str, Any]) -> None:
        """Partially update a document.

        Args:
            remote_key: Key of the document to update.
            fields: Fields to overwrite.
        """
        await self._request("PATCH", self.record_path(remote_key), fields)

    async def delete(self, remote_key: str) -> None:
        """Delete a document.

        Args:
            remote_key: Key of the document to delete.
        """
        await self._request("DELETE", self.record_path(remote_key))
