"""Tests for configuration loading."""

from pathlib import Path

import pytest

from enqueues.config import LOCAL_DEV_ENV, BlockCategoryConfig, Config


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "enqueues.toml"
        config_file.write_text("""
[paths]
root_dir = "theme"
source_dir = "src/editor"
dist_dir = "/build/editor/"
css_ext = ".sass"

[registration]
namespace = "acme"
global_prefix = "acmeEditor"
local_dev = true

[server]
host = "0.0.0.0"
port = 3000

[[block_categories]]
slug = "acme"
title = "Acme"
icon = "dist/images/logo.svg"
""")

        config = Config.load(config_file)

        assert config.paths.root_dir == tmp_path / "theme"
        assert config.paths.source_path == tmp_path / "theme" / "src" / "editor"
        assert config.paths.dist_path == tmp_path / "theme" / "build" / "editor"
        assert config.paths.css_ext == "sass"
        assert config.registration.namespace == "acme"
        assert config.registration.global_prefix == "acmeEditor"
        assert config.strict
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.block_categories == [
            BlockCategoryConfig(slug="acme", title="Acme", icon="dist/images/logo.svg"),
        ]
        assert config.config_path == config_file

    def test__empty_file__uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "enqueues.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.paths.root_dir == tmp_path
        assert config.paths.dist_dir == "dist/block-editor"
        assert config.paths.source_dir == "source/editor"
        assert config.registration.namespace == "enqueues"
        assert config.registration.global_prefix == "customBlockEditor"
        assert config.block_categories == []

    def test__missing_explicit_path__raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.toml")

    def test__discovers_config_in_parent(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "enqueues.toml").write_text('[registration]\nnamespace = "found"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.registration.namespace == "found"
        assert config.paths.root_dir == tmp_path

    def test__local_dev_env__enables_strict(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config_file = tmp_path / "enqueues.toml"
        config_file.write_text("")
        monkeypatch.setenv(LOCAL_DEV_ENV, "true")

        assert Config.load(config_file).strict

    def test__file_setting__wins_over_env(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config_file = tmp_path / "enqueues.toml"
        config_file.write_text("[registration]\nlocal_dev = false\n")
        monkeypatch.setenv(LOCAL_DEV_ENV, "1")

        assert not Config.load(config_file).strict


class TestConfigValidation:
    """Tests for invalid configuration values."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('paths = "x"', "paths section must be a dictionary"),
            ("[paths]\nroot_dir = 1", "paths.root_dir must be a string"),
            ('[paths]\ndist_dir = ""', "paths.dist_dir must be a non-empty string"),
            ('[registration]\nnamespace = ""', "registration.namespace must be a non-empty string"),
            ('[registration]\nlocal_dev = "yes"', "registration.local_dev must be a boolean"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ('block_categories = "acme"', "block_categories must be an array of tables"),
            ('[[block_categories]]\ntitle = "Acme"', "block_categories.slug must be a non-empty string"),
            ('[[block_categories]]\nslug = "a"\nicon = 3', "block_categories.icon must be a string"),
        ],
    )
    def test__invalid_value__raises_value_error(
        self,
        tmp_path: Path,
        content: str,
        message: str,
    ) -> None:
        config_file = tmp_path / "enqueues.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__none_values__keep_config(self, test_config: Config) -> None:
        assert test_config.with_overrides() == test_config

    def test__overrides__return_new_config(self, test_config: Config, tmp_path: Path) -> None:
        updated = test_config.with_overrides(
            root_dir=tmp_path / "other",
            local_dev=True,
            port=9000,
        )

        assert updated.paths.root_dir == tmp_path / "other"
        assert updated.strict
        assert updated.server.port == 9000
        assert test_config.paths.root_dir == tmp_path
        assert not test_config.strict
