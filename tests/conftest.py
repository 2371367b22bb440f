"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from notestage.config import Config, MirrorConfig, ServerConfig, SiteConfig, StorageConfig
from notestage.core.renderer import MarkdownRenderer


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create an empty content directory."""
    content = tmp_path / "content"
    content.mkdir(exist_ok=True)
    return content


@pytest.fixture
def write_doc(content_dir: Path) -> Callable[[str, str], Path]:
    """Write a document into the content directory under a storage key."""

    def _write(key: str, text: str) -> Path:
        path = content_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture
def test_config(content_dir: Path) -> Config:
    """Create a test configuration reading from the tmp content directory."""
    return Config(
        server=ServerConfig(),
        site=SiteConfig(name="Blog", fallback_domain="domain-a.example"),
        storage=StorageConfig(backend="local", root=content_dir),
        mirror=MirrorConfig(),
    )
