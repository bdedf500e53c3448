"""Runtime lookup of compiled artifacts.

Compiled output layout:
    dist/block-editor/
    └── blocks/
        └── hero/
            ├── index.abcd123.js     # Editor bundle, content hash in name
            ├── index.abcd123.meta   # {"dependencies": [...], "version": "..."}
            ├── style.css
            └── style-rtl.css        # Never picked as the style bundle
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from enqueues.core.roles import compiled_extension, role_for
from enqueues.core.types import AssetCategory, FileKind, RenderContext
from enqueues.errors import InvalidMetadataError, MissingMetadataFileError

logger = logging.getLogger(__name__)

_SIDECAR_SUFFIXES = (".meta", ".asset.json")

# Content hash as emitted by the bundler (hex digest, possibly truncated)
_HASH = r"[0-9a-f]{6,}"
_TRAILING_HASH_RE = re.compile(rf"\.{_HASH}$")


@dataclass(frozen=True)
class AssetMetadata:
    """Dependencies and version read from a metadata sidecar."""

    dependencies: list[str] = field(default_factory=list)
    version: str = ""


@dataclass(frozen=True)
class CompiledArtifact:
    """Compiled asset file resolved for one (category, name, role)."""

    path: Path
    url_path: str
    kind: FileKind
    stem: str
    dependencies: list[str]
    version: str
    metadata_found: bool = False


def list_asset_dirs(dist_dir: Path, category: AssetCategory | str) -> list[str]:
    """List asset folder names under a category of the dist directory.

    Args:
        dist_dir: Compiled output root (e.g., dist/block-editor)
        category: Asset category

    Returns:
        Sorted folder names, empty if the category directory is missing
    """
    category_dir = dist_dir / AssetCategory(category)
    if not category_dir.is_dir():
        return []
    return sorted(entry.name for entry in category_dir.iterdir() if entry.is_dir())


def locate_artifact(
    dist_dir: Path,
    category: AssetCategory | str,
    asset_name: str,
    render_context: RenderContext | str,
    kind: FileKind | str,
    *,
    root_dir: Path | None = None,
) -> CompiledArtifact | None:
    """Find the compiled artifact for an asset role.

    Args:
        dist_dir: Compiled output root (e.g., dist/block-editor)
        category: Asset category
        asset_name: Asset folder name
        render_context: Context selecting the role
        kind: Script or stylesheet
        root_dir: Root that URL paths are relative to (default: dist_dir)

    Returns:
        CompiledArtifact if a matching file exists, None otherwise

    Raises:
        InvalidMetadataError: If a script sidecar exists but is malformed
    """
    file_kind = FileKind(kind)
    stem = role_for(render_context, file_kind)
    asset_dir = dist_dir / AssetCategory(category) / asset_name

    path = find_file_path(asset_dir, stem, compiled_extension(file_kind))
    if path is None:
        logger.debug(f"No {stem} {file_kind} in {asset_dir}")
        return None

    metadata_found = False
    if file_kind is FileKind.SCRIPT:
        try:
            metadata = load_metadata(path, stem)
            metadata_found = True
        except MissingMetadataFileError:
            logger.debug(f"No metadata sidecar for {path}, using defaults")
            metadata = AssetMetadata(version=_mtime_version(path))
    else:
        metadata = AssetMetadata(version=_mtime_version(path))

    return CompiledArtifact(
        path=path,
        url_path=_url_path(path, root_dir or dist_dir),
        kind=file_kind,
        stem=stem,
        dependencies=list(metadata.dependencies),
        version=metadata.version or _mtime_version(path),
        metadata_found=metadata_found,
    )


def find_file_path(directory: Path, stem: str, ext: str) -> Path | None:
    """Find a compiled file by stem, tolerating a content hash in its name.

    Matches "{stem}.{ext}" exactly, or one of "{stem}.{hash}.{ext}",
    "{stem}-{hash}.{ext}" and "{stem}.{ext}.{hash}" where the hash is a hex
    digest of at least six characters. Compound names such as
    "style-index.css" or "style-rtl.css" are therefore never matched. The
    exact name wins; otherwise the most recently modified hashed file is
    returned.

    Args:
        directory: Directory to search
        stem: Filename stem (e.g., "index")
        ext: Extension without dot (e.g., "js")

    Returns:
        Path to the matching file or None
    """
    if not directory.is_dir():
        return None

    exact = directory / f"{stem}.{ext}"
    if exact.is_file():
        return exact

    stem, ext = re.escape(stem), re.escape(ext)
    pattern = re.compile(rf"{stem}(?:[.-]{_HASH}\.{ext}|\.{ext}\.{_HASH})")
    candidates = [
        entry
        for entry in directory.iterdir()
        if pattern.fullmatch(entry.name) and entry.is_file()
    ]

    if not candidates:
        return None
    return max(candidates, key=lambda p: (p.stat().st_mtime, p.name))


def load_metadata(artifact: Path, stem: str) -> AssetMetadata:
    """Load the metadata sidecar of a compiled script.

    Looks for "{artifact}.meta" and "{artifact}.asset.json" next to the
    artifact (extension and any trailing hash stripped), then falls back to
    "{stem}.meta".

    Args:
        artifact: Compiled script path
        stem: Role stem of the artifact

    Returns:
        AssetMetadata from the sidecar

    Raises:
        MissingMetadataFileError: If no sidecar exists
        InvalidMetadataError: If the sidecar cannot be parsed
    """
    name = _TRAILING_HASH_RE.sub("", artifact.name)
    base = name.removesuffix(Path(name).suffix)
    candidates = [artifact.with_name(base + suffix) for suffix in _SIDECAR_SUFFIXES]
    candidates.append(artifact.with_name(f"{stem}.meta"))

    for candidate in candidates:
        if candidate.is_file():
            return _parse_metadata(candidate)

    raise MissingMetadataFileError(artifact)


def _parse_metadata(path: Path) -> AssetMetadata:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidMetadataError(f"Cannot read metadata file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidMetadataError(f"Metadata file {path} must contain an object")

    dependencies = data.get("dependencies", [])
    if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
        raise InvalidMetadataError(f"{path}: dependencies must be a list of strings")

    version = data.get("version", "")
    if isinstance(version, int | float) and not isinstance(version, bool):
        version = str(version)
    if not isinstance(version, str):
        raise InvalidMetadataError(f"{path}: version must be a string")

    return AssetMetadata(dependencies=dependencies, version=version)


def _mtime_version(path: Path) -> str:
    return str(int(path.stat().st_mtime))


def _url_path(path: Path, root_dir: Path) -> str:
    try:
        relative = path.relative_to(root_dir)
    except ValueError:
        relative = Path(path.name)
    return "/" + relative.as_posix()
