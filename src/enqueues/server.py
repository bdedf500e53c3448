"""aiohttp development server for Enqueues.

Exposes the resolved entry map and per-context registration passes as JSON
and serves the compiled dist directory.
"""

import logging

from aiohttp import web

from enqueues.api.assets import create_assets_routes
from enqueues.api.entries import create_entries_routes
from enqueues.app_keys import config_key
from enqueues.config import Config

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[config_key] = config

    app.router.add_routes(create_entries_routes())
    app.router.add_routes(create_assets_routes())

    # Compiled output, served under the same URL paths the registrar reports
    dist_path = config.paths.dist_path
    if dist_path.is_dir():
        app.router.add_static(f"/{config.paths.dist_dir}", dist_path)
    else:
        logger.warning(f"Dist directory {dist_path} does not exist, static serving disabled")

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
