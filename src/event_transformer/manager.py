"""Manifest-driven template setup and the rendering entry points."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import DEFAULT_SETTINGS, TransformerSettings
from .exceptions import ManifestError
from .sources.github import GitHubContentSource
from .sources.local import LocalContentSource
from .transformer.card import CardRenderer
from .transformer.event import EventTransformer
from .transformer.models import (
    CardRendererConfigEntry,
    ConfigEntry,
    CustomTemplatingOptions,
    EventTransformConfigEntry,
    TemplateManifest,
    TemplateSelector,
)
from .transformer.registry import EngineRegistry

if TYPE_CHECKING:
    import httpx

    from .contract import ClientType, TemplateType
    from .ports.source import IContentSource

logger = logging.getLogger(__name__)


class TemplateManager:
    """
    Registers the templates listed in a manifest and renders with them.

    Card and event pipelines share one EngineRegistry, so a template
    registered during setup is visible to every later render call.

    Setup order:
        1. Custom helpers/tags are installed on their engines.
        2. The manifest is fetched and filtered by the optional selector.
        3. All template texts are fetched concurrently.
        4. Templates are compiled in manifest order; a later entry with the
           same key replaces an earlier one (or fails when ``strict``).

    If any fetch fails nothing is registered and the error propagates.
    """

    def __init__(
        self,
        engines: EngineRegistry | None = None,
        settings: TransformerSettings = DEFAULT_SETTINGS,
        *,
        strict: bool = False,
    ) -> None:
        self.engines = engines or EngineRegistry.default()
        self.settings = settings
        self.strict = strict
        self.card_renderer = CardRenderer(self.engines, settings)
        self.event_transformer = EventTransformer(self.engines, settings)

    # ── Setup ────────────────────────────────────────────────────

    async def setup(
        self,
        source: IContentSource,
        options: CustomTemplatingOptions | None = None,
        selector: TemplateSelector | None = None,
        manifest_path: str | None = None,
    ) -> list[ConfigEntry]:
        """Register every (selected) manifest entry from ``source``. Returns the entries."""
        if options is not None:
            self.apply_options(options)

        manifest_path = manifest_path or self.settings.manifest_name
        manifest = TemplateManifest.parse(await source.fetch_text(manifest_path))
        entries = [e for e in manifest.entries if selector is None or selector.matches(e)]
        logger.info(
            "Registering %d of %d templates from %r (%s)",
            len(entries),
            len(manifest),
            source,
            manifest_path,
        )

        plan = [(entry, self._pipeline(entry)) for entry in entries]
        self._check_duplicates(plan)
        for entry, _ in plan:
            self.engines.resolve(entry.template_type)

        texts = await asyncio.gather(
            *(source.fetch_text(pipeline.template_path(entry)) for entry, pipeline in plan)
        )
        for (entry, pipeline), text in zip(plan, texts):
            pipeline.register_text(entry.template_type, pipeline.template_key(entry), text)
        return entries

    async def setup_template_configuration(
        self,
        root: Path | str = ".",
        options: CustomTemplatingOptions | None = None,
        selector: TemplateSelector | None = None,
    ) -> list[ConfigEntry]:
        """Set up from a local checkout containing the manifest and template folders."""
        return await self.setup(LocalContentSource(root), options, selector)

    async def setup_template_configuration_from_repo(
        self,
        repository: str,
        branch: str,
        access_token: str | None = None,
        options: CustomTemplatingOptions | None = None,
        selector: TemplateSelector | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> list[ConfigEntry]:
        """Set up from a branch of a GitHub repository."""
        source = GitHubContentSource(
            repository, branch, access_token, settings=self.settings, client=client
        )
        return await self.setup(source, options, selector)

    def apply_options(self, options: CustomTemplatingOptions) -> None:
        """Install custom helpers and tags on their engines."""
        for engine_options in options.engine_options:
            engine = self.engines.resolve(engine_options.template_type)
            for name, helper in engine_options.helpers.items():
                engine.register_helper(name, helper)
            for name, tag in engine_options.tags.items():
                engine.register_tag(name, tag)
            logger.debug(
                "Customised %s engine: %d helpers, %d tags",
                engine_options.template_type.value,
                len(engine_options.helpers),
                len(engine_options.tags),
            )

    # ── Single registrations ─────────────────────────────────────

    async def register_card_template(
        self, source: IContentSource, entry: CardRendererConfigEntry
    ) -> None:
        await self.card_renderer.register_template(source, entry)

    async def register_event_template(
        self, source: IContentSource, entry: EventTransformConfigEntry
    ) -> None:
        await self.event_transformer.register_template(source, entry)

    # ── Rendering ────────────────────────────────────────────────

    def render_card(
        self,
        template_type: TemplateType,
        source_type: str,
        client_type: ClientType,
        event_data: Any,
    ) -> str:
        return self.card_renderer.construct_card_json(
            template_type, source_type, client_type, event_data
        )

    def render_event(self, template_type: TemplateType, source_type: str, event_data: Any) -> str:
        return self.event_transformer.construct_event_json(template_type, source_type, event_data)

    # ── Internals ────────────────────────────────────────────────

    def _pipeline(self, entry: ConfigEntry) -> CardRenderer | EventTransformer:
        if isinstance(entry, CardRendererConfigEntry):
            return self.card_renderer
        return self.event_transformer

    def _check_duplicates(self, plan: list[tuple[Any, Any]]) -> None:
        seen: dict[tuple[TemplateType, str], ConfigEntry] = {}
        for entry, pipeline in plan:
            key = (entry.template_type, pipeline.template_key(entry))
            previous = seen.get(key)
            if previous is not None:
                msg = (
                    f"Duplicate template key {key[1]!r}: {previous.template_name} "
                    f"is replaced by {entry.template_name}"
                )
                if self.strict:
                    raise ManifestError(msg)
                logger.warning(msg)
            seen[key] = entry


__all__ = ["TemplateManager"]
