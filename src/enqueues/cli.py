"""CLI interface for Enqueues.

Command-line tool for resolving bundler entries and inspecting compiled
block editor assets.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from enqueues.config import Config
from enqueues.controller import BlockEditorController
from enqueues.core.entries import entries_to_json, resolve_entries, write_entries
from enqueues.core.locator import locate_artifact
from enqueues.core.registrar import RecordingHost
from enqueues.core.types import AssetCategory, FileKind, RenderContext
from enqueues.errors import EnqueuesError

CATEGORY_CHOICE = click.Choice([c.value for c in AssetCategory])
CONTEXT_CHOICE = click.Choice([c.value for c in RenderContext])

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover enqueues.toml)",
)

root_option = click.option(
    "--root-dir",
    "-r",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Project root directory (overrides config)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Enqueues - convention-based block editor assets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@root_option
@click.option(
    "--category",
    "categories",
    type=CATEGORY_CHOICE,
    multiple=True,
    help="Only resolve these categories (repeatable, default: all)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the entry map to this JSON file instead of stdout",
)
def entries(
    config_path: Path | None,
    root_dir: Path | None,
    categories: tuple[str, ...],
    output: Path | None,
) -> None:
    """Resolve bundler entry points from the source tree."""
    config = _load_config(config_path, root_dir=root_dir)

    try:
        entry_map = resolve_entries(
            config.paths.root_dir,
            categories or None,
            css_ext=config.paths.css_ext,
            source_dir=config.paths.source_dir,
        )
    except EnqueuesError as e:
        _fail(e)

    if output is None:
        click.echo(entries_to_json(entry_map), nl=False)
        return

    write_entries(entry_map, output)
    click.echo(f"Wrote {len(entry_map)} entries to {output}", err=True)


@cli.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("name")
@config_option
@root_option
@click.option(
    "--context",
    "render_context",
    type=CONTEXT_CHOICE,
    default=RenderContext.FRONTEND.value,
    show_default=True,
    help="Render context selecting the role",
)
@click.option(
    "--kind",
    type=click.Choice([k.value for k in FileKind]),
    default=FileKind.SCRIPT.value,
    show_default=True,
    help="Asset kind",
)
def locate(
    category: str,
    name: str,
    config_path: Path | None,
    root_dir: Path | None,
    render_context: str,
    kind: str,
) -> None:
    """Find the compiled artifact for one asset role."""
    config = _load_config(config_path, root_dir=root_dir)

    try:
        artifact = locate_artifact(
            config.paths.dist_path,
            category,
            name,
            render_context,
            kind,
            root_dir=config.paths.root_dir,
        )
    except EnqueuesError as e:
        _fail(e)

    if artifact is None:
        click.echo(click.style(f"Not found: {category}/{name} ({render_context} {kind})", fg="yellow"))
        sys.exit(1)

    click.echo(f"Path: {artifact.path}")
    click.echo(f"URL: {artifact.url_path}")
    click.echo(f"Version: {artifact.version}")
    click.echo(f"Dependencies: {', '.join(artifact.dependencies) or '(none)'}")
    if kind == FileKind.SCRIPT and not artifact.metadata_found:
        click.echo("Metadata: missing, using defaults")


@cli.command()
@click.argument("render_context", type=CONTEXT_CHOICE)
@config_option
@root_option
@click.option(
    "--local-dev/--no-local-dev",
    default=None,
    help="Treat missing compiled output as fatal (overrides config)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the registrations as JSON")
def assets(
    render_context: str,
    config_path: Path | None,
    root_dir: Path | None,
    local_dev: bool | None,
    as_json: bool,
) -> None:
    """Show what a registration pass would declare to the host."""
    config = _load_config(config_path, root_dir=root_dir, local_dev=local_dev)
    host = RecordingHost()
    controller = BlockEditorController(config, host)

    try:
        if render_context == RenderContext.EDITOR:
            reports = controller.enqueue_editor()
        else:
            reports = [
                controller.registrar.enqueue_assets(category, render_context)
                for category in AssetCategory
            ]
    except EnqueuesError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(host.to_dict(), indent=2))
        return

    for registration in host.styles.values():
        click.echo(f"style   {registration.handle}  {registration.url}?ver={registration.version}")
    for registration in host.scripts.values():
        deps = f"  deps: {', '.join(registration.deps)}" if registration.deps else ""
        click.echo(
            f"script  {registration.handle}  {registration.url}?ver={registration.version}{deps}",
        )
    for report in reports:
        for name, reason in report.skipped.items():
            click.echo(click.style(f"skipped {report.context.category}/{name}: {reason}", fg="yellow"))
    if not host.styles and not host.scripts:
        click.echo("No compiled assets found")


@cli.command()
@config_option
@root_option
def blocks(config_path: Path | None, root_dir: Path | None) -> None:
    """List compiled blocks and configured block categories."""
    config = _load_config(config_path, root_dir=root_dir)
    controller = BlockEditorController(config, RecordingHost())

    try:
        names = controller.register_blocks()
    except EnqueuesError as e:
        _fail(e)

    for name in names:
        click.echo(name)
    for category in controller.block_categories():
        click.echo(f"category {category['slug']}: {category['title']}")


@cli.command()
@config_option
@root_option
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (overrides config)")
def serve(
    config_path: Path | None,
    root_dir: Path | None,
    host: str | None,
    port: int | None,
) -> None:
    """Start the development asset server."""
    from enqueues.server import run_server

    config = _load_config(config_path, root_dir=root_dir, host=host, port=port)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Root directory: {config.paths.root_dir}")
    click.echo(f"Dist directory: {config.paths.dist_path}")

    run_server(config)


def _load_config(config_path: Path | None, **overrides: Any) -> Config:
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)
    return config.with_overrides(**overrides)


def _fail(error: Exception) -> NoReturn:
    click.echo(click.style(f"Error: {error}", fg="red"), err=True)
    sys.exit(1)
