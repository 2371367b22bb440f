"""Configuration management for Notestage.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Literal

from notestage.core.domains import DEFAULT_PREVIEW_SUFFIXES
from notestage.core.metadata import DEFAULT_SITE_NAME

CONFIG_FILENAME = "notestage.toml"

StorageBackend = Literal["local", "http"]
STORAGE_BACKENDS: tuple[StorageBackend, ...] = ("local", "http")


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SiteConfig:
    """Site identity and domain resolution."""

    name: str = DEFAULT_SITE_NAME
    fallback_domain: str = "domain-a.example"
    preview_suffixes: list[str] = field(default_factory=lambda: list(DEFAULT_PREVIEW_SUFFIXES))


@dataclass
class StorageConfig:
    """Primary content store configuration.

    The "local" backend reads from `root`; the "http" backend reads from
    `base_url`.
    """

    backend: StorageBackend = "local"
    root: Path = field(default_factory=lambda: Path("content"))
    base_url: str | None = None


@dataclass
class MirrorConfig:
    """HTTP mirror probed after the primary store."""

    base_url: str | None = None
    timeout: float = 10.0


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    site: SiteConfig
    storage: StorageConfig
    mirror: MirrorConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for notestage.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(
            server=ServerConfig(),
            site=SiteConfig(),
            storage=StorageConfig(),
            mirror=MirrorConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid {path.name}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            site=cls._parse_site(data.get("site")),
            storage=cls._parse_storage(data.get("storage"), config_dir),
            mirror=cls._parse_mirror(data.get("mirror")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        name = data.get("name", DEFAULT_SITE_NAME)
        if not isinstance(name, str):
            raise ValueError("site.name must be a string")

        fallback_domain = data.get("fallback_domain", "domain-a.example")
        if not isinstance(fallback_domain, str) or not fallback_domain:
            raise ValueError("site.fallback_domain must be a non-empty string")

        suffixes_raw = data.get("preview_suffixes", list(DEFAULT_PREVIEW_SUFFIXES))
        if not isinstance(suffixes_raw, list):
            raise ValueError("site.preview_suffixes must be a list")
        preview_suffixes: list[str] = []
        for item in suffixes_raw:
            if not isinstance(item, str):
                raise ValueError("site.preview_suffixes items must be strings")
            preview_suffixes.append(item)

        return SiteConfig(
            name=name,
            fallback_domain=fallback_domain,
            preview_suffixes=preview_suffixes,
        )

    @classmethod
    def _parse_storage(cls, data: object, config_dir: Path) -> StorageConfig:
        """Parse storage configuration section.

        Args:
            data: Raw storage section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            StorageConfig instance
        """
        if data is None:
            return StorageConfig(root=config_dir / "content")

        if not isinstance(data, dict):
            raise ValueError("storage section must be a dictionary")

        backend = data.get("backend", "local")
        if backend not in STORAGE_BACKENDS:
            raise ValueError(f"storage.backend must be one of: {', '.join(STORAGE_BACKENDS)}")

        root = data.get("root", "content")
        if not isinstance(root, str):
            raise ValueError("storage.root must be a string")

        base_url = data.get("base_url")
        if base_url is not None and not isinstance(base_url, str):
            raise ValueError("storage.base_url must be a string")
        if backend == "http" and not base_url:
            raise ValueError("storage.base_url is required for the http backend")

        return StorageConfig(backend=backend, root=config_dir / root, base_url=base_url)

    @classmethod
    def _parse_mirror(cls, data: object) -> MirrorConfig:
        if data is None:
            return MirrorConfig()

        if not isinstance(data, dict):
            raise ValueError("mirror section must be a dictionary")

        base_url = data.get("base_url")
        if base_url is not None and not isinstance(base_url, str):
            raise ValueError("mirror.base_url must be a string")

        timeout = data.get("timeout", 10.0)
        if not isinstance(timeout, int | float) or isinstance(timeout, bool):
            raise ValueError("mirror.timeout must be a number")

        return MirrorConfig(base_url=base_url, timeout=float(timeout))

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        content_dir: Path | None = None,
        mirror_url: str | None = None,
        fallback_domain: str | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified. A content_dir override also switches the
        storage backend to "local".

        Args:
            host: Override server.host
            port: Override server.port
            content_dir: Override storage.root
            mirror_url: Override mirror.base_url
            fallback_domain: Override site.fallback_domain

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        storage = self.storage
        if content_dir is not None:
            storage = replace(self.storage, backend="local", root=content_dir)

        mirror = self.mirror
        if mirror_url is not None:
            mirror = replace(self.mirror, base_url=mirror_url)

        site = self.site
        if fallback_domain is not None:
            site = replace(self.site, fallback_domain=fallback_domain)

        return replace(
            self,
            server=server,
            site=site,
            storage=storage,
            mirror=mirror,
        )
