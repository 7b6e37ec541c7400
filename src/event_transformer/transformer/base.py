"""Generic transformer base for template dispatch and registration."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from ..config import DEFAULT_SETTINGS, TransformerSettings
from .models import TemplateConfigEntry
from .registry import EngineRegistry

if TYPE_CHECKING:
    from ..contract import TemplateType
    from ..ports.source import IContentSource

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=TemplateConfigEntry)


class Transformer(ABC, Generic[EntryT]):
    """Shared mechanics of the card and event pipelines.

    Subclasses define the key shape and template path of their manifest
    entry type; this base routes a ``(template_type, key)`` pair to the
    right engine for both rendering and registration. Engine errors
    propagate unchanged so subclasses can add context without changing
    their kind.
    """

    KEY_PREFIX: ClassVar[str]

    def __init__(
        self,
        engines: EngineRegistry | None = None,
        settings: TransformerSettings = DEFAULT_SETTINGS,
    ) -> None:
        self.engines = engines or EngineRegistry.default()
        self.settings = settings

    # ── Entry shape ──────────────────────────────────────────────

    @abstractmethod
    def template_key(self, entry: EntryT) -> str:
        """Return the lookup key of ``entry``."""

    @abstractmethod
    def template_path(self, entry: EntryT) -> str:
        """Return the path of the template file of ``entry`` inside its source."""

    # ── Dispatch ─────────────────────────────────────────────────

    def apply_template(self, template_type: TemplateType, key: str, data_model: Any) -> str:
        """Render the template stored under ``key`` in the engine of ``template_type``."""
        engine = self.engines.resolve(template_type)
        return engine.apply_template(key, data_model)

    def register_text(self, template_type: TemplateType, key: str, template: str) -> None:
        """Compile ``template`` into the engine of ``template_type`` under ``key``."""
        engine = self.engines.resolve(template_type)
        engine.register_template(key, template)
        self.engines.mark_registered(template_type, key)
        logger.debug("Registered template %s with %s engine", key, template_type.value)

    async def read_and_register_template(
        self,
        source: IContentSource,
        path: str,
        key: str,
        template_type: TemplateType,
    ) -> None:
        """
        Fetch the template text at ``path`` and register it under ``key``.

        ``source`` decides where the text comes from (local checkout or a
        branch of a remote repository, with its credential). Fetch failures
        propagate unchanged.
        """
        self.engines.resolve(template_type)
        template = await source.fetch_text(path)
        self.register_text(template_type, key, template)

    async def register_template(self, source: IContentSource, entry: EntryT) -> None:
        """Fetch and register the template described by ``entry``."""
        await self.read_and_register_template(
            source,
            self.template_path(entry),
            self.template_key(entry),
            entry.template_type,
        )


__all__ = ["EntryT", "Transformer"]
