"""Tests for the role lookup table."""

import pytest

from enqueues.core.roles import ROLE_TABLE, Role, compiled_extension, role_for, source_extension
from enqueues.core.types import AssetCategory, FileKind, RenderContext


class TestRoleFor:
    """Tests for role_for()."""

    @pytest.mark.parametrize(
        ("context", "kind", "stem"),
        [
            ("editor", "script", "index"),
            ("editor", "stylesheet", "editor"),
            ("view", "script", "view"),
            ("view", "stylesheet", "view"),
            ("frontend", "script", "script"),
            ("frontend", "stylesheet", "style"),
        ],
    )
    def test__known_context__returns_stem(self, context: str, kind: str, stem: str) -> None:
        assert role_for(context, kind) == stem

    def test__unknown_context__falls_back_to_frontend(self) -> None:
        assert role_for("admin", FileKind.SCRIPT) == "script"
        assert role_for("admin", FileKind.STYLESHEET) == "style"

    def test__unknown_kind__raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            role_for(RenderContext.EDITOR, "image")


class TestRoleTable:
    """Tests for the per-category role table."""

    def test__plugins__have_no_editor_stylesheet(self) -> None:
        stems = {(role.kind, role.stem) for role in ROLE_TABLE[AssetCategory.PLUGINS]}

        assert (FileKind.STYLESHEET, "editor") not in stems
        assert len(stems) == 5

    @pytest.mark.parametrize("category", [AssetCategory.BLOCKS, AssetCategory.EXTENSIONS])
    def test__blocks_and_extensions__use_all_six_roles(self, category: AssetCategory) -> None:
        assert len(ROLE_TABLE[category]) == 6

    def test__role_stem__matches_lookup(self) -> None:
        role = Role(RenderContext.EDITOR, FileKind.SCRIPT)

        assert role.stem == "index"


class TestExtensions:
    """Tests for source and compiled extensions."""

    def test__source_stylesheet__uses_configured_extension(self) -> None:
        assert source_extension(FileKind.STYLESHEET, "sass") == "sass"
        assert source_extension(FileKind.SCRIPT, "sass") == "js"

    def test__compiled_extensions(self) -> None:
        assert compiled_extension(FileKind.SCRIPT) == "js"
        assert compiled_extension(FileKind.STYLESHEET) == "css"
