"""Registration of compiled artifacts with a host.

Each pass walks the asset folders of one category in the dist directory,
locates the stylesheet and script for the requested render context, and
declares what it finds to the host under deterministic handles:

    Discover -> Derive stem -> Locate -> Register

One folder failing never stops its siblings unless strict mode is on.
"""

import logging
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from enqueues.core.locator import CompiledArtifact, list_asset_dirs, locate_artifact
from enqueues.core.roles import role_for, source_extension
from enqueues.core.types import AssetCategory, FileKind, RenderContext
from enqueues.errors import (
    ArtifactNotFoundError,
    InvalidMetadataError,
    MissingDistDirectoryError,
)

logger = logging.getLogger(__name__)

LocalizedDataProvider = Callable[[AssetCategory, str], Mapping[str, Any]]

DEFAULT_GLOBAL_PREFIX = "customBlockEditor"


class AssetHost(Protocol):
    """Asset pipeline of the host application."""

    def register_script(
        self,
        handle: str,
        url: str,
        deps: list[str],
        version: str,
        activate_now: bool,
    ) -> None: ...

    def register_style(self, handle: str, url: str, version: str, activate_now: bool) -> None: ...

    def attach_global_data(self, handle: str, var_name: str, data: Mapping[str, Any]) -> None: ...

    def register_block_type(self, metadata_path: Path) -> bool: ...


@dataclass(frozen=True)
class RegistrationContext:
    """Controls which role is requested and whether it is activated."""

    category: AssetCategory
    render_context: RenderContext
    register_only: bool = True


@dataclass
class ScriptRegistration:
    """Script declared to a RecordingHost."""

    handle: str
    url: str
    deps: list[str]
    version: str
    activated: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "handle": self.handle,
            "url": self.url,
            "deps": self.deps,
            "version": self.version,
            "activated": self.activated,
        }


@dataclass
class StyleRegistration:
    """Stylesheet declared to a RecordingHost."""

    handle: str
    url: str
    version: str
    activated: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "handle": self.handle,
            "url": self.url,
            "version": self.version,
            "activated": self.activated,
        }


@dataclass
class RecordingHost:
    """In-memory host that records every registration.

    Used by the CLI and the development server to report what a pass would
    declare, and by tests.
    """

    base_url: str = ""
    scripts: dict[str, ScriptRegistration] = field(default_factory=dict)
    styles: dict[str, StyleRegistration] = field(default_factory=dict)
    global_data: dict[str, dict[str, Mapping[str, Any]]] = field(default_factory=dict)
    blocks: list[Path] = field(default_factory=list)

    def register_script(
        self,
        handle: str,
        url: str,
        deps: list[str],
        version: str,
        activate_now: bool,
    ) -> None:
        self.scripts[handle] = ScriptRegistration(
            handle=handle,
            url=self.base_url.rstrip("/") + url,
            deps=list(deps),
            version=version,
            activated=activate_now,
        )

    def register_style(self, handle: str, url: str, version: str, activate_now: bool) -> None:
        self.styles[handle] = StyleRegistration(
            handle=handle,
            url=self.base_url.rstrip("/") + url,
            version=version,
            activated=activate_now,
        )

    def attach_global_data(self, handle: str, var_name: str, data: Mapping[str, Any]) -> None:
        self.global_data.setdefault(handle, {})[var_name] = dict(data)

    def register_block_type(self, metadata_path: Path) -> bool:
        self.blocks.append(metadata_path)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scripts": [s.to_dict() for s in self.scripts.values()],
            "styles": [s.to_dict() for s in self.styles.values()],
            "globals": self.global_data,
            "blocks": [str(path) for path in self.blocks],
        }


@dataclass
class RegistrationReport:
    """Outcome of one registration pass."""

    context: RegistrationContext
    registered: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)


def asset_handle(namespace: str, asset_name: str, stem: str) -> str:
    """Deterministic host handle for an asset role."""
    return f"{namespace}/{asset_name}-{stem}"


def global_var_name(prefix: str, category: AssetCategory | str) -> str:
    """Deterministic name of the global holding a category's localized data."""
    category = str(category)
    return f"{prefix}{category[:1].upper()}{category[1:]}Config"


class AssetRegistrar:
    """Declares compiled artifacts to a host.

    Artifacts are looked up under dist_dir and their URLs are made relative
    to root_dir. Localized data providers are keyed by category; a category
    without a provider gets no global data.
    """

    REQUIRED_CONTEXTS = frozenset({RenderContext.EDITOR, RenderContext.FRONTEND})

    def __init__(
        self,
        host: AssetHost,
        dist_dir: Path,
        *,
        root_dir: Path | None = None,
        namespace: str = "enqueues",
        global_prefix: str = DEFAULT_GLOBAL_PREFIX,
        localized_data_providers: Mapping[AssetCategory, LocalizedDataProvider] | None = None,
        source_dir: Path | None = None,
        strict: bool = False,
        required_contexts: Collection[RenderContext] | None = None,
    ) -> None:
        """Initialize registrar.

        Args:
            host: Host asset pipeline receiving the registrations
            dist_dir: Compiled output root (e.g., dist/block-editor)
            root_dir: Root that asset URLs are relative to (default: dist_dir)
            namespace: Handle prefix
            global_prefix: Prefix of localized data globals
            localized_data_providers: Payload provider per category
            source_dir: Source tree (e.g., source/editor); when given, strict mode
                only requires output for categories and frontend scripts that exist there
            strict: Raise on missing output instead of skipping (local development)
            required_contexts: Contexts whose script must exist in strict mode
        """
        self._host = host
        self._dist_dir = dist_dir
        self._root_dir = root_dir
        self._namespace = namespace
        self._global_prefix = global_prefix
        self._providers = dict(localized_data_providers or {})
        self._source_dir = source_dir
        self._strict = strict
        self._required_contexts = frozenset(
            self.REQUIRED_CONTEXTS if required_contexts is None else required_contexts,
        )

    @property
    def dist_dir(self) -> Path:
        return self._dist_dir

    @property
    def strict(self) -> bool:
        return self._strict

    def register_asset(
        self,
        artifact: CompiledArtifact,
        name: str,
        context: RegistrationContext,
        localized_data_provider: LocalizedDataProvider | None = None,
    ) -> str:
        """Declare one artifact to the host.

        Scripts also receive the category's localized payload when it is
        non-empty.

        Args:
            artifact: Located compiled artifact
            name: Asset folder name
            context: Registration context
            localized_data_provider: Overrides the category's configured provider

        Returns:
            Handle the artifact was registered under
        """
        handle = asset_handle(self._namespace, name, artifact.stem)
        activate_now = not context.register_only

        if artifact.kind is FileKind.STYLESHEET:
            self._host.register_style(handle, artifact.url_path, artifact.version, activate_now)
            logger.debug(f"Registered style {handle}")
            return handle

        self._host.register_script(
            handle,
            artifact.url_path,
            artifact.dependencies,
            artifact.version,
            activate_now,
        )
        logger.debug(f"Registered script {handle}")

        provider = localized_data_provider or self._providers.get(context.category)
        if provider is not None:
            payload = provider(context.category, name)
            if payload:
                var_name = global_var_name(self._global_prefix, context.category)
                self._host.attach_global_data(handle, var_name, payload)

        return handle

    def enqueue_assets(
        self,
        category: AssetCategory | str,
        render_context: RenderContext | str,
        register_only: bool = True,
    ) -> RegistrationReport:
        """Register every asset folder of a category for a render context.

        Args:
            category: Asset category
            render_context: Context selecting the roles
            register_only: Declare without activating

        Returns:
            RegistrationReport listing registered handles and skipped folders

        Raises:
            MissingDistDirectoryError: In strict mode, if an authored category has no dist directory
            ArtifactNotFoundError: In strict mode, if a required script is missing
        """
        context = RegistrationContext(
            category=AssetCategory(category),
            render_context=RenderContext(render_context),
            register_only=register_only,
        )
        report = RegistrationReport(context=context)

        category_dir = self._dist_dir / context.category
        if not category_dir.is_dir():
            if self._strict and self._has_source(context.category):
                raise MissingDistDirectoryError(category_dir)
            logger.debug(f"Skipping {context.category}: {category_dir} does not exist")
            return report

        for name in list_asset_dirs(self._dist_dir, context.category):
            try:
                report.registered.extend(self._register_folder(name, context))
            except (InvalidMetadataError, OSError) as e:
                if self._strict:
                    raise
                logger.warning(f"Skipping {context.category}/{name}: {e}")
                report.skipped[name] = str(e)

        logger.info(
            f"Registered {len(report.registered)} assets for "
            f"{context.category}/{context.render_context}"
            f" ({len(report.skipped)} skipped)",
        )
        return report

    def _register_folder(self, name: str, context: RegistrationContext) -> list[str]:
        # Locate everything first so a failing folder registers nothing
        located = {
            kind: locate_artifact(
                self._dist_dir,
                context.category,
                name,
                context.render_context,
                kind,
                root_dir=self._root_dir,
            )
            for kind in (FileKind.STYLESHEET, FileKind.SCRIPT)
        }
        if located[FileKind.SCRIPT] is None:
            self._check_required(name, context)

        handles: list[str] = []
        for artifact in located.values():
            if artifact is None:
                continue
            if self._strict and artifact.kind is FileKind.SCRIPT and not artifact.metadata_found:
                logger.warning(f"Metadata sidecar missing for {artifact.path}, run the build")
            handles.append(self.register_asset(artifact, name, context))
        return handles

    def _check_required(self, name: str, context: RegistrationContext) -> None:
        if not self._strict or context.render_context not in self._required_contexts:
            return
        stem = role_for(context.render_context, FileKind.SCRIPT)
        if context.render_context is RenderContext.FRONTEND and not self._has_source(
            context.category,
            name,
            stem,
        ):
            return
        raise ArtifactNotFoundError(self._dist_dir / context.category / name, stem)

    def _has_source(self, category: AssetCategory, name: str = "", stem: str = "") -> bool:
        """Check whether a category, or one script of it, was authored.

        Without a known source tree everything counts as authored.
        """
        if self._source_dir is None:
            return True
        path = self._source_dir / category
        if not name:
            return path.is_dir()
        ext = source_extension(FileKind.SCRIPT)
        return (path / name / f"{stem}.{ext}").is_file()


def run_passes(
    registrar: AssetRegistrar,
    passes: list[RegistrationContext],
) -> list[RegistrationReport]:
    """Run several registration passes in order."""
    return [
        registrar.enqueue_assets(context.category, context.render_context, context.register_only)
        for context in passes
    ]
