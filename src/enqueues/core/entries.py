"""Build-time entry resolution.

Scans the conventional source tree and builds the flat entry map handed to
the module bundler:

    source/editor/
    ├── blocks/
    │   └── hero/
    │       ├── index.js        -> blocks/hero/index
    │       ├── view.js         -> blocks/hero/view
    │       └── style.scss      -> blocks/hero/style
    ├── plugins/
    └── extensions/
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from enqueues.core.roles import ROLE_TABLE, Role, RoleTable, source_extension
from enqueues.core.types import AssetCategory, EntryKey, is_slug, make_entry_key
from enqueues.errors import DuplicateEntryKeyError

logger = logging.getLogger(__name__)

EntryMap = dict[EntryKey, Path]

DEFAULT_SOURCE_DIR = "source/editor"

_CATEGORY_ORDER = {category: i for i, category in enumerate(AssetCategory)}
_STEM_ORDER = {stem: i for i, stem in enumerate(("index", "script", "view", "editor", "style"))}


def resolve_entries(
    root_dir: Path,
    categories: Iterable[AssetCategory | str] | None = None,
    role_table: RoleTable | None = None,
    *,
    css_ext: str = "scss",
    source_dir: str = DEFAULT_SOURCE_DIR,
) -> EntryMap:
    """Resolve bundler entry points from the source tree.

    Args:
        root_dir: Project root containing the source directory
        categories: Categories to scan (default: every category in role_table)
        role_table: Roles used per category (default: ROLE_TABLE)
        css_ext: Source stylesheet extension
        source_dir: Source directory relative to root_dir

    Returns:
        Entry map sorted by category, asset name, then role

    Raises:
        DuplicateEntryKeyError: If two source files resolve to the same key
        ValueError: If a category has no roles in role_table
    """
    table = ROLE_TABLE if role_table is None else role_table
    selected = list(table) if categories is None else [AssetCategory(c) for c in categories]
    base = root_dir.resolve() / source_dir

    partials: list[EntryMap] = []
    for category in selected:
        roles = table.get(category)
        if roles is None:
            raise ValueError(f"No roles defined for category {category!s}")
        for role in roles:
            partials.append(_collect_role(base, category, role, css_ext))

    merged = merge_entries(*partials)
    entries = dict(sorted(merged.items(), key=lambda item: _sort_key(item[0])))
    logger.info(f"Resolved {len(entries)} entries from {base}")
    return entries


def merge_entries(*partials: EntryMap) -> EntryMap:
    """Merge partial entry maps, failing on any repeated key.

    Args:
        partials: Entry maps to concatenate in order

    Returns:
        New merged entry map

    Raises:
        DuplicateEntryKeyError: If a key appears more than once
    """
    merged: EntryMap = {}
    for partial in partials:
        for key, path in partial.items():
            existing = merged.get(key)
            if existing is not None:
                raise DuplicateEntryKeyError(key, existing, path)
            merged[key] = path
    return merged


def entries_to_json(entries: EntryMap) -> str:
    """Serialize an entry map for bundler configuration."""
    return json.dumps({key: str(path) for key, path in entries.items()}, indent=2) + "\n"


def write_entries(entries: EntryMap, path: Path) -> None:
    """Write an entry map as JSON.

    Args:
        entries: Entry map to write
        path: Destination file, parent directories are created
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(entries_to_json(entries), encoding="utf-8")


def _collect_role(base: Path, category: AssetCategory, role: Role, css_ext: str) -> EntryMap:
    """Glob one role of one category into a partial entry map."""
    category_dir = base / category
    if not category_dir.is_dir():
        return {}

    stem = role.stem
    ext = source_extension(role.kind, css_ext)
    partial: EntryMap = {}
    for match in sorted(category_dir.glob(f"*/{stem}.{ext}")):
        name = match.parent.name
        if not is_slug(name):
            logger.warning(f"Skipping {match}: {name!r} is not a valid asset name")
            continue
        key = make_entry_key(category, name, stem)
        logger.debug(f"Found {key} -> {match}")
        partial[key] = match
    return partial


def _sort_key(key: EntryKey) -> tuple[int, str, int]:
    category, name, stem = key.split("/")
    return (
        _CATEGORY_ORDER[AssetCategory(category)],
        name,
        _STEM_ORDER.get(stem, len(_STEM_ORDER)),
    )
