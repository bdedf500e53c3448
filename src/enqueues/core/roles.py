"""Role lookup table.

Maps a render context and file kind to the conventional filename stem.
The build-time resolver and the runtime locator both derive filenames from
this table, so a file produced under a role is found under the same role.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from enqueues.core.types import AssetCategory, FileKind, RenderContext

_STEMS: dict[tuple[RenderContext, FileKind], str] = {
    (RenderContext.EDITOR, FileKind.SCRIPT): "index",
    (RenderContext.EDITOR, FileKind.STYLESHEET): "editor",
    (RenderContext.VIEW, FileKind.SCRIPT): "view",
    (RenderContext.VIEW, FileKind.STYLESHEET): "view",
    (RenderContext.FRONTEND, FileKind.SCRIPT): "script",
    (RenderContext.FRONTEND, FileKind.STYLESHEET): "style",
}


@dataclass(frozen=True)
class Role:
    """One conventional asset file: its kind and the context it serves."""

    context: RenderContext
    kind: FileKind

    @property
    def stem(self) -> str:
        return role_for(self.context, self.kind)


JS_ROLES = (
    Role(RenderContext.EDITOR, FileKind.SCRIPT),
    Role(RenderContext.FRONTEND, FileKind.SCRIPT),
    Role(RenderContext.VIEW, FileKind.SCRIPT),
)

CSS_ROLES = (
    Role(RenderContext.EDITOR, FileKind.STYLESHEET),
    Role(RenderContext.FRONTEND, FileKind.STYLESHEET),
    Role(RenderContext.VIEW, FileKind.STYLESHEET),
)

RoleTable = Mapping[AssetCategory, tuple[Role, ...]]

# Plugins have no editor stylesheet.
ROLE_TABLE: RoleTable = {
    AssetCategory.BLOCKS: JS_ROLES + CSS_ROLES,
    AssetCategory.PLUGINS: JS_ROLES + CSS_ROLES[1:],
    AssetCategory.EXTENSIONS: JS_ROLES + CSS_ROLES,
}


def role_for(render_context: RenderContext | str, file_kind: FileKind | str) -> str:
    """Return the filename stem for a render context and file kind.

    Unknown contexts are treated as frontend.

    Args:
        render_context: Context the asset is requested for
        file_kind: Script or stylesheet

    Returns:
        Filename stem without extension (e.g., "index", "style")

    Raises:
        ValueError: If file_kind is not a supported kind
    """
    kind = FileKind(file_kind)
    try:
        context = RenderContext(render_context)
    except ValueError:
        context = RenderContext.FRONTEND
    return _STEMS[(context, kind)]


def source_extension(kind: FileKind, css_ext: str = "scss") -> str:
    """File extension of a source file of the given kind."""
    return "js" if kind is FileKind.SCRIPT else css_ext


def compiled_extension(kind: FileKind) -> str:
    """File extension of a compiled artifact of the given kind."""
    return "js" if kind is FileKind.SCRIPT else "css"
