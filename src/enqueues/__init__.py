"""Enqueues - convention-based block editor asset resolution.

Resolves bundler entry points from a conventional source tree and locates
the compiled artifacts again at serve time.
"""

from enqueues.core.entries import EntryMap, merge_entries, resolve_entries
from enqueues.core.locator import CompiledArtifact, locate_artifact
from enqueues.core.registrar import AssetRegistrar, RecordingHost, RegistrationContext
from enqueues.core.roles import role_for
from enqueues.core.types import AssetCategory, FileKind, RenderContext

__all__ = [
    "AssetCategory",
    "AssetRegistrar",
    "CompiledArtifact",
    "EntryMap",
    "FileKind",
    "RecordingHost",
    "RegistrationContext",
    "RenderContext",
    "locate_artifact",
    "merge_entries",
    "resolve_entries",
    "role_for",
]
