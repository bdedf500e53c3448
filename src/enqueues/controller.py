"""Block editor registration passes.

Wires the per-category, per-context registration passes onto a hook
registry. The host fires "init" once, then "frontend" on public page
requests and "editor" when the block editor loads.
"""

import logging
from collections.abc import Mapping
from typing import Any

from enqueues.config import Config
from enqueues.core.blocks import Translate, block_categories, register_blocks
from enqueues.core.hooks import HookRegistry
from enqueues.core.registrar import (
    AssetHost,
    AssetRegistrar,
    LocalizedDataProvider,
    RegistrationContext,
    RegistrationReport,
    run_passes,
)
from enqueues.core.types import AssetCategory, RenderContext

logger = logging.getLogger(__name__)

FRONTEND_PASSES = [
    RegistrationContext(category, render_context, register_only=True)
    for category in AssetCategory
    for render_context in (RenderContext.FRONTEND, RenderContext.VIEW)
]

EDITOR_PASSES = [
    RegistrationContext(AssetCategory.PLUGINS, RenderContext.EDITOR, register_only=False),
    RegistrationContext(AssetCategory.EXTENSIONS, RenderContext.EDITOR, register_only=False),
]


def _empty_params(category: AssetCategory, name: str) -> dict[str, Any]:
    return {}


class BlockEditorController:
    """Registers blocks, block categories, and category assets with a host."""

    def __init__(
        self,
        config: Config,
        host: AssetHost,
        *,
        translate: Translate | None = None,
        localized_data_providers: Mapping[AssetCategory, LocalizedDataProvider] | None = None,
    ) -> None:
        self._config = config
        self._host = host
        self._translate = translate
        providers: dict[AssetCategory, LocalizedDataProvider] = {
            AssetCategory.PLUGINS: _empty_params,
            AssetCategory.EXTENSIONS: _empty_params,
        }
        providers.update(localized_data_providers or {})
        self._registrar = AssetRegistrar(
            host,
            config.paths.dist_path,
            root_dir=config.paths.root_dir,
            namespace=config.registration.namespace,
            global_prefix=config.registration.global_prefix,
            localized_data_providers=providers,
            source_dir=config.paths.source_path,
            strict=config.strict,
        )

    @property
    def registrar(self) -> AssetRegistrar:
        return self._registrar

    def set_up(self, hooks: HookRegistry) -> None:
        """Register the controller's callbacks."""
        hooks.add("init", self.register_blocks)
        hooks.add("block_categories", self.block_categories)
        hooks.add("frontend", self.enqueue_frontend)
        hooks.add("editor", self.enqueue_editor)

    def register_blocks(self) -> list[str]:
        return register_blocks(
            self._config.paths.dist_path,
            self._host,
            namespace=self._config.registration.namespace,
            strict=self._config.strict,
        )

    def block_categories(self, existing: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
        return block_categories(
            existing or [],
            [category.to_dict() for category in self._config.block_categories],
            self._config.paths.root_dir,
            self._translate,
        )

    def enqueue_frontend(self) -> list[RegistrationReport]:
        """Declare frontend and view assets of every category without activating them."""
        return run_passes(self._registrar, FRONTEND_PASSES)

    def enqueue_editor(self) -> list[RegistrationReport]:
        """Declare and activate plugin and extension editor assets."""
        return run_passes(self._registrar, EDITOR_PASSES)
