"""Tests for the development server."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web

from enqueues.app_keys import config_key
from enqueues.config import Config
from enqueues.server import create_app

MakeFile = Callable[..., Path]


@pytest.fixture
def app(test_config: Config, dist_dir: Path) -> web.Application:
    return create_app(test_config)


class TestCreateApp:
    """Tests for create_app()."""

    def test__config__is_stored(self, test_config: Config) -> None:
        app = create_app(test_config)

        assert app[config_key] is test_config


class TestEntriesRoute:
    """Tests for GET /api/entries."""

    @pytest.mark.asyncio
    async def test__returns_entry_map(
        self,
        aiohttp_client: Any,
        app: web.Application,
        make_file: MakeFile,
    ) -> None:
        make_file("source/editor/blocks/hero/index.js")

        client = await aiohttp_client(app)
        response = await client.get("/api/entries")

        assert response.status == 200
        data = await response.json()
        assert list(data["entries"]) == ["blocks/hero/index"]

    @pytest.mark.asyncio
    async def test__duplicate_key__returns_409(
        self,
        aiohttp_client: Any,
        app: web.Application,
        make_file: MakeFile,
    ) -> None:
        make_file("source/editor/blocks/hero/view.js")
        make_file("source/editor/blocks/hero/view.scss")

        client = await aiohttp_client(app)
        response = await client.get("/api/entries")

        assert response.status == 409
        data = await response.json()
        assert data["key"] == "blocks/hero/view"


class TestAssetsRoute:
    """Tests for GET /api/assets/{context}."""

    @pytest.mark.asyncio
    async def test__editor__returns_registrations(
        self,
        aiohttp_client: Any,
        app: web.Application,
        make_file: MakeFile,
        make_sidecar: Callable[..., Path],
    ) -> None:
        make_file("dist/block-editor/plugins/sidebar/index.js")
        make_sidecar("dist/block-editor/plugins/sidebar/index.meta", ["dep-a"], "1.2.3")

        client = await aiohttp_client(app)
        response = await client.get("/api/assets/editor")

        assert response.status == 200
        data = await response.json()
        assert data["scripts"] == [
            {
                "handle": "acme/sidebar-index",
                "url": "/dist/block-editor/plugins/sidebar/index.js",
                "deps": ["dep-a"],
                "version": "1.2.3",
                "activated": True,
            },
        ]

    @pytest.mark.asyncio
    async def test__unknown_context__returns_404(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/assets/admin")

        assert response.status == 404

    @pytest.mark.asyncio
    async def test__registered_url__is_served(
        self,
        aiohttp_client: Any,
        app: web.Application,
        make_file: MakeFile,
    ) -> None:
        """URLs reported for registrations resolve to the compiled files."""
        make_file("dist/block-editor/blocks/hero/view.js", "console.log('view');")

        client = await aiohttp_client(app)
        data = await (await client.get("/api/assets/view")).json()
        response = await client.get(data["scripts"][0]["url"])

        assert response.status == 200
        assert await response.text() == "console.log('view');"


class TestBlocksRoute:
    """Tests for GET /api/blocks."""

    @pytest.mark.asyncio
    async def test__returns_blocks(
        self,
        aiohttp_client: Any,
        app: web.Application,
        make_file: MakeFile,
    ) -> None:
        make_file("dist/block-editor/blocks/hero/block.json", "{}")

        client = await aiohttp_client(app)
        response = await client.get("/api/blocks")

        assert response.status == 200
        data = await response.json()
        assert data == {"blocks": ["acme/hero"], "categories": []}
