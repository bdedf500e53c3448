"""Block metadata discovery and block categories.

Blocks are compiled to dist/<output>/blocks/<name>/ alongside a block.json
that the host registers the block type from. The metadata file is handed
over untouched.
"""

import base64
import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from enqueues.core.locator import list_asset_dirs
from enqueues.core.types import AssetCategory
from enqueues.errors import BlockRegistrationError, MissingBlockMetadataError, MissingDistDirectoryError

logger = logging.getLogger(__name__)

BLOCK_METADATA_FILENAME = "block.json"

Translate = Callable[[str], str]


class BlockHost(Protocol):
    def register_block_type(self, metadata_path: Path) -> bool: ...


def _identity(text: str) -> str:
    return text


def register_blocks(
    dist_dir: Path,
    host: BlockHost,
    *,
    namespace: str = "enqueues",
    strict: bool = False,
) -> list[str]:
    """Register every compiled block that has a metadata file.

    Args:
        dist_dir: Compiled output root (e.g., dist/block-editor)
        host: Host receiving the block metadata paths
        namespace: Block name prefix
        strict: Raise on missing or rejected blocks instead of skipping

    Returns:
        Names of registered blocks (e.g., ["enqueues/hero"])

    Raises:
        MissingDistDirectoryError: In strict mode, if the blocks directory is missing
        MissingBlockMetadataError: In strict mode, if a block has no block.json
        BlockRegistrationError: In strict mode, if the host rejects a block
    """
    blocks_dir = dist_dir / AssetCategory.BLOCKS
    if not blocks_dir.is_dir():
        if strict:
            raise MissingDistDirectoryError(blocks_dir)
        return []

    registered: list[str] = []
    for name in list_asset_dirs(dist_dir, AssetCategory.BLOCKS):
        block_name = f"{namespace}/{name}"
        metadata_file = blocks_dir / name / BLOCK_METADATA_FILENAME

        if not metadata_file.is_file():
            if strict:
                raise MissingBlockMetadataError(metadata_file)
            logger.warning(f"Skipping block {block_name}: {metadata_file} is missing")
            continue

        if not host.register_block_type(metadata_file):
            if strict:
                raise BlockRegistrationError(block_name)
            logger.warning(f"Block {block_name} failed to register")
            continue

        registered.append(block_name)

    logger.info(f"Registered {len(registered)} blocks")
    return registered


def block_categories(
    existing: Iterable[Mapping[str, Any]],
    categories: Iterable[Mapping[str, Any]],
    root_dir: Path,
    translate: Translate | None = None,
) -> list[dict[str, Any]]:
    """Append configured block categories to the host's list.

    Titles are passed through translate. An icon naming an SVG file under
    root_dir is embedded as a base64 data URI; any other icon value (such as
    a dashicon name) is kept as is.

    Args:
        existing: Categories already known to the host
        categories: Configured categories with slug, title and optional icon
        root_dir: Directory icon paths are relative to
        translate: Translation lookup for titles

    Returns:
        New list with the configured categories appended
    """
    translate = translate or _identity
    result = [dict(category) for category in existing]

    for category in categories:
        entry = dict(category)
        if "title" in entry:
            entry["title"] = translate(entry["title"])
        icon = entry.get("icon")
        if isinstance(icon, str):
            entry["icon"] = embed_svg_icon(root_dir, icon)
        result.append(entry)

    return result


def embed_svg_icon(root_dir: Path, icon: str) -> str:
    """Return a data URI for an SVG icon file, or the icon unchanged."""
    svg_file = root_dir / icon.lstrip("/")
    if not icon.endswith(".svg") or not svg_file.is_file():
        return icon

    content = svg_file.read_bytes()
    if not content:
        return icon

    encoded = base64.b64encode(content).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"
