"""Tests for content stores."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from notestage.core.storage import ContentStore, HttpStore, LocalStore


class TestLocalStore:
    """Tests for LocalStore."""

    @pytest.mark.asyncio
    async def test__existing_key__returns_text(
        self, content_dir: Path, write_doc: Callable[[str, str], Path]
    ) -> None:
        write_doc("example.com/guide.md", "# Guide")
        store = LocalStore(content_dir)

        assert await store.get("example.com/guide.md") == "# Guide"

    @pytest.mark.asyncio
    async def test__missing_key__returns_none(self, content_dir: Path) -> None:
        store = LocalStore(content_dir)

        assert await store.get("example.com/missing.md") is None

    @pytest.mark.asyncio
    async def test__directory_key__returns_none(
        self, content_dir: Path, write_doc: Callable[[str, str], Path]
    ) -> None:
        write_doc("example.com/guide.md", "# Guide")
        store = LocalStore(content_dir)

        assert await store.get("example.com") is None

    @pytest.mark.asyncio
    async def test__parent_traversal__rejected(self, tmp_path: Path, content_dir: Path) -> None:
        """Refuse keys that escape the root directory."""
        (tmp_path / "secret.md").write_text("secret")
        store = LocalStore(content_dir)

        assert await store.get("../secret.md") is None

    @pytest.mark.asyncio
    async def test__invalid_utf8__raises(self, content_dir: Path) -> None:
        (content_dir / "bad.md").write_bytes(b"\xff\xfe\xfa")
        store = LocalStore(content_dir)

        with pytest.raises(UnicodeDecodeError):
            await store.get("bad.md")


class TestHttpStore:
    """Tests for HttpStore."""

    @pytest.mark.asyncio
    async def test__2xx__returns_body(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text="# Mirrored")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = HttpStore(client, "https://content.example.com/")
            text = await store.get("shared/guide.md")

        assert text == "# Mirrored"
        assert requested == ["https://content.example.com/shared/guide.md"]

    @pytest.mark.asyncio
    async def test__non_2xx__returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Not found")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = HttpStore(client, "https://content.example.com")

            assert await store.get("shared/guide.md") is None

    @pytest.mark.asyncio
    async def test__transport_error__propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = HttpStore(client, "https://content.example.com")

            with pytest.raises(httpx.ConnectError):
                await store.get("shared/guide.md")

    @pytest.mark.asyncio
    async def test__attributes__exposed_read_only(self) -> None:
        async with httpx.AsyncClient() as client:
            store = HttpStore(client, "https://content.example.com/")

            assert store.client is client
            assert store.base_url == "https://content.example.com"
            with pytest.raises(AttributeError):
                store.base_url = "https://other.example.com"  # type: ignore[misc]


class TestContentStore:
    """Tests for the ContentStore protocol."""

    @pytest.mark.asyncio
    async def test__both_variants__satisfy_protocol(self, content_dir: Path) -> None:
        async with httpx.AsyncClient() as client:
            assert isinstance(HttpStore(client, "https://content.example.com"), ContentStore)
        assert isinstance(LocalStore(content_dir), ContentStore)
