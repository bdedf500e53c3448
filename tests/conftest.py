"""Shared test fixtures."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from enqueues.config import Config, PathsConfig, RegistrationConfig, ServerConfig

MakeFile = Callable[..., Path]


@pytest.fixture
def make_file(tmp_path: Path) -> MakeFile:
    """Create a file under tmp_path, creating parent directories."""

    def _make(relative: str, content: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def make_sidecar(make_file: MakeFile) -> Callable[..., Path]:
    """Write a JSON metadata sidecar."""

    def _make(relative: str, dependencies: list[str], version: str) -> Path:
        return make_file(relative, json.dumps({"dependencies": dependencies, "version": version}))

    return _make


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    """Compiled output root at the default location."""
    path = tmp_path / "dist" / "block-editor"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration rooted at tmp_path."""
    return Config(
        paths=PathsConfig(root_dir=tmp_path),
        registration=RegistrationConfig(namespace="acme"),
        server=ServerConfig(),
    )
