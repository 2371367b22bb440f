"""Content stores.

A store maps storage keys (e.g. "example.com/guide.md") to markdown text.
Two variants share one protocol:

- LocalStore: a directory on disk, used in development
- HttpStore: a remote bucket or mirror reachable over HTTP

Stores report a miss as None. Transport errors propagate; the fetcher
decides how to treat them.
"""

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@runtime_checkable
class ContentStore(Protocol):
    """Key/value access to markdown documents."""

    async def get(self, key: str) -> str | None: ...


class LocalStore:
    """Store backed by a local directory.

    Keys are POSIX paths relative to the root directory.
    """

    def __init__(self, root: Path) -> None:
        """Initialize store.

        Args:
            root: Directory containing domain folders and markdown files
        """
        self._root = root

    @property
    def root(self) -> Path:
        """Root content directory."""
        return self._root

    async def get(self, key: str) -> str | None:
        """Read a document by key.

        Args:
            key: Storage key (e.g. "shared/guide.md")

        Returns:
            Document text, or None if the key doesn't exist

        Raises:
            OSError: If the file exists but cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        path = self._resolve(key)
        if path is None or not path.is_file():
            return None
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    def _resolve(self, key: str) -> Path | None:
        """Map a key to a path inside the root, refusing anything outside it."""
        parts = PurePosixPath(key).parts
        if not parts or ".." in parts or parts[0] == "/":
            logger.warning(f"Rejected storage key: {key!r}")
            return None
        return self._root.joinpath(*parts)


class HttpStore:
    """Store reached over HTTP at `<base_url>/<key>`.

    Any 2xx response body is the document. Every other status is a miss.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        """Initialize store.

        Args:
            client: Shared httpx AsyncClient (owned by the caller)
            base_url: Base URL documents are served under
        """
        self._client = client
        self._base_url = base_url.rstrip("/")

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def base_url(self) -> str:
        """Base URL without trailing slash."""
        return self._base_url

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    async def get(self, key: str) -> str | None:
        """Fetch a document by key.

        Args:
            key: Storage key

        Returns:
            Response text on 2xx, None otherwise

        Raises:
            httpx.HTTPError: If the request fails at transport level
            httpx.InvalidURL: If the key cannot form a valid URL
        """
        url = self.url_for(key)
        logger.debug(f"GET {url}")
        response = await self._client.get(url)
        if not response.is_success:
            logger.debug(f"GET {url} returned {response.status_code}")
            return None
        return response.text
