"""Assets API endpoints.

Runs a registration pass against a recording host for every request and
returns what would be declared to the host.
"""

from aiohttp import web

from enqueues.app_keys import config_key
from enqueues.controller import BlockEditorController
from enqueues.core.registrar import RecordingHost
from enqueues.core.types import AssetCategory, RenderContext
from enqueues.errors import EnqueuesError


def create_assets_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/assets/{context}", get_assets),
        web.get("/api/blocks", get_blocks),
    ]


async def get_assets(request: web.Request) -> web.Response:
    raw_context = request.match_info["context"]
    try:
        render_context = RenderContext(raw_context)
    except ValueError:
        return web.json_response(
            {"error": "Unknown render context", "context": raw_context},
            status=404,
        )

    host = RecordingHost()
    controller = BlockEditorController(request.app[config_key], host)
    registrar = controller.registrar

    try:
        if render_context is RenderContext.EDITOR:
            reports = controller.enqueue_editor()
        else:
            reports = [
                registrar.enqueue_assets(category, render_context)
                for category in AssetCategory
            ]
    except EnqueuesError as e:
        return web.json_response({"error": str(e)}, status=500)

    skipped = {
        f"{report.context.category}/{name}": reason
        for report in reports
        for name, reason in report.skipped.items()
    }
    return web.json_response({**host.to_dict(), "skipped": skipped})


async def get_blocks(request: web.Request) -> web.Response:
    host = RecordingHost()
    controller = BlockEditorController(request.app[config_key], host)

    try:
        names = controller.register_blocks()
    except EnqueuesError as e:
        return web.json_response({"error": str(e)}, status=500)

    return web.json_response(
        {"blocks": names, "categories": controller.block_categories()},
    )
