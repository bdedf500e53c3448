"""Entries API endpoint.

Returns the bundler entry map resolved from the current source tree.
"""

from aiohttp import web

from enqueues.app_keys import config_key
from enqueues.core.entries import resolve_entries
from enqueues.errors import DuplicateEntryKeyError


def create_entries_routes() -> list[web.RouteDef]:
    return [web.get("/api/entries", get_entries)]


async def get_entries(request: web.Request) -> web.Response:
    config = request.app[config_key]

    try:
        entries = resolve_entries(
            config.paths.root_dir,
            css_ext=config.paths.css_ext,
            source_dir=config.paths.source_dir,
        )
    except DuplicateEntryKeyError as e:
        return web.json_response(
            {"error": "Duplicate entry key", "key": e.key, "paths": [str(e.first), str(e.second)]},
            status=409,
        )

    return web.json_response({"entries": {key: str(path) for key, path in entries.items()}})
