"""Core type definitions."""

import re
from enum import StrEnum
from typing import NewType

# Bundler entry key (e.g., "blocks/hero/index")
# Distinct from filesystem paths to catch type mismatches
EntryKey = NewType("EntryKey", str)

_SLUG_RE = re.compile(r"[a-z0-9][a-z0-9_-]*", re.IGNORECASE)


class AssetCategory(StrEnum):
    """Top-level grouping of asset folders."""

    BLOCKS = "blocks"
    PLUGINS = "plugins"
    EXTENSIONS = "extensions"


class RenderContext(StrEnum):
    """Page-rendering situation that selects which role is requested."""

    FRONTEND = "frontend"
    EDITOR = "editor"
    VIEW = "view"


class FileKind(StrEnum):
    """Kind of asset file."""

    SCRIPT = "script"
    STYLESHEET = "stylesheet"


def is_slug(name: str) -> bool:
    """Check whether an asset folder name is a filesystem-safe slug."""
    return _SLUG_RE.fullmatch(name) is not None


def make_entry_key(category: AssetCategory | str, name: str, stem: str) -> EntryKey:
    """Build the bundler entry key for one asset role."""
    return EntryKey(f"{category}/{name}/{stem}")
