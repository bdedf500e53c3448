"""Configuration management for Enqueues.

Supports TOML configuration format with auto-discovery.
"""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "enqueues.toml"
LOCAL_DEV_ENV = "ENQUEUES_LOCAL_DEV"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class PathsConfig:
    """Source and compiled output locations."""

    root_dir: Path = field(default_factory=Path.cwd)
    source_dir: str = "source/editor"
    dist_dir: str = "dist/block-editor"
    css_ext: str = "scss"

    @property
    def source_path(self) -> Path:
        return self.root_dir / self.source_dir

    @property
    def dist_path(self) -> Path:
        return self.root_dir / self.dist_dir


@dataclass
class RegistrationConfig:
    """Host registration configuration."""

    namespace: str = "enqueues"
    global_prefix: str = "customBlockEditor"
    local_dev: bool = False


@dataclass
class ServerConfig:
    """Development server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class BlockCategoryConfig:
    """Block category added to the editor inserter."""

    slug: str
    title: str
    icon: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"slug": self.slug, "title": self.title}
        if self.icon is not None:
            result["icon"] = self.icon
        return result


@dataclass
class Config:
    """Application configuration."""

    paths: PathsConfig
    registration: RegistrationConfig
    server: ServerConfig
    block_categories: list[BlockCategoryConfig] = field(default_factory=list)
    config_path: Path | None = None

    @property
    def strict(self) -> bool:
        """Whether missing compiled output is fatal (local development)."""
        return self.registration.local_dev

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for enqueues.toml in current directory and parents.

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
        """Search for config file in current directory and parents."""
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
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            paths=PathsConfig(),
            registration=RegistrationConfig(local_dev=_env_local_dev()),
            server=ServerConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            paths=cls._parse_paths(data.get("paths"), config_dir),
            registration=cls._parse_registration(data.get("registration")),
            server=cls._parse_server(data.get("server")),
            block_categories=cls._parse_block_categories(data.get("block_categories")),
            config_path=path,
        )

    @classmethod
    def _parse_paths(cls, data: object, config_dir: Path) -> PathsConfig:
        """Parse paths configuration section.

        Args:
            data: Raw paths section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            PathsConfig instance
        """
        if data is None:
            return PathsConfig(root_dir=config_dir)

        if not isinstance(data, dict):
            raise ValueError("paths section must be a dictionary")

        root_dir = data.get("root_dir", ".")
        if not isinstance(root_dir, str):
            raise ValueError("paths.root_dir must be a string")

        values: dict[str, str] = {}
        for key, default in (
            ("source_dir", "source/editor"),
            ("dist_dir", "dist/block-editor"),
            ("css_ext", "scss"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str) or not value:
                raise ValueError(f"paths.{key} must be a non-empty string")
            values[key] = value

        return PathsConfig(
            root_dir=config_dir / root_dir,
            source_dir=values["source_dir"].strip("/"),
            dist_dir=values["dist_dir"].strip("/"),
            css_ext=values["css_ext"].lstrip("."),
        )

    @classmethod
    def _parse_registration(cls, data: object) -> RegistrationConfig:
        """Parse registration configuration section.

        local_dev falls back to the ENQUEUES_LOCAL_DEV environment variable
        when the file does not set it.
        """
        if data is None:
            return RegistrationConfig(local_dev=_env_local_dev())

        if not isinstance(data, dict):
            raise ValueError("registration section must be a dictionary")

        namespace = data.get("namespace", "enqueues")
        if not isinstance(namespace, str) or not namespace:
            raise ValueError("registration.namespace must be a non-empty string")

        global_prefix = data.get("global_prefix", "customBlockEditor")
        if not isinstance(global_prefix, str):
            raise ValueError("registration.global_prefix must be a string")

        local_dev = data.get("local_dev")
        if local_dev is None:
            local_dev = _env_local_dev()
        elif not isinstance(local_dev, bool):
            raise ValueError("registration.local_dev must be a boolean")

        return RegistrationConfig(
            namespace=namespace,
            global_prefix=global_prefix,
            local_dev=local_dev,
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
    def _parse_block_categories(cls, data: object) -> list[BlockCategoryConfig]:
        if data is None:
            return []

        if not isinstance(data, list):
            raise ValueError("block_categories must be an array of tables")

        categories: list[BlockCategoryConfig] = []
        for item in data:
            if not isinstance(item, dict):
                raise ValueError("block_categories items must be tables")

            slug = item.get("slug")
            if not isinstance(slug, str) or not slug:
                raise ValueError("block_categories.slug must be a non-empty string")

            title = item.get("title", slug)
            if not isinstance(title, str):
                raise ValueError("block_categories.title must be a string")

            icon = item.get("icon")
            if icon is not None and not isinstance(icon, str):
                raise ValueError("block_categories.icon must be a string")

            categories.append(BlockCategoryConfig(slug=slug, title=title, icon=icon))

        return categories

    def with_overrides(
        self,
        *,
        root_dir: Path | None = None,
        dist_dir: str | None = None,
        local_dev: bool | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            root_dir: Override paths.root_dir
            dist_dir: Override paths.dist_dir
            local_dev: Override registration.local_dev
            host: Override server.host
            port: Override server.port

        Returns:
            New Config instance with overrides applied
        """
        paths = self.paths
        if root_dir is not None or dist_dir is not None:
            paths = replace(
                self.paths,
                root_dir=root_dir if root_dir is not None else self.paths.root_dir,
                dist_dir=dist_dir if dist_dir is not None else self.paths.dist_dir,
            )

        registration = self.registration
        if local_dev is not None:
            registration = replace(self.registration, local_dev=local_dev)

        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        return replace(self, paths=paths, registration=registration, server=server)


def _env_local_dev() -> bool:
    return os.environ.get(LOCAL_DEV_ENV, "").strip().lower() in _TRUTHY
