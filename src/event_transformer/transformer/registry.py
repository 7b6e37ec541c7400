"""Engine registry holding one template engine instance per template type."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

from ..contract import TemplateType
from ..engines import HandlebarsTemplateEngine, JinjaTemplateEngine
from ..exceptions import TemplateEngineNotFoundError
from ..ports.engine import ITemplateEngine

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], ITemplateEngine]

DEFAULT_ENGINE_FACTORIES: Mapping[TemplateType, EngineFactory] = {
    TemplateType.HANDLEBARS: HandlebarsTemplateEngine,
    TemplateType.JINJA: JinjaTemplateEngine,
}


class EngineRegistry:
    """Routes a template type to its engine instance.

    Engines are created lazily from ``factories`` on first use, or supplied
    directly with :meth:`register_engine`. Instances are never shared across
    template types. The registry also remembers which ``(template_type, key)``
    pairs have been registered through it.
    """

    def __init__(
        self,
        factories: Mapping[TemplateType, EngineFactory] | None = None,
    ) -> None:
        self._factories = dict(factories or {})
        self._engines: dict[TemplateType, ITemplateEngine] = {}
        self._registered: set[tuple[TemplateType, str]] = set()
        self._lock = threading.Lock()

    @classmethod
    def default(cls) -> EngineRegistry:
        """Registry that knows both built-in engines."""
        return cls(DEFAULT_ENGINE_FACTORIES)

    # ── Configuration ────────────────────────────────────────────

    def register_engine(self, template_type: TemplateType, engine: ITemplateEngine) -> None:
        with self._lock:
            self._engines[template_type] = engine
            self._registered = {k for k in self._registered if k[0] is not template_type}
        logger.debug("Registered engine %s for %s", type(engine).__name__, template_type.value)

    # ── Lookup ───────────────────────────────────────────────────

    def resolve(self, template_type: TemplateType) -> ITemplateEngine:
        """Return the engine for ``template_type`` or raise TemplateEngineNotFoundError."""
        engine = self._engines.get(template_type)
        if engine is not None:
            return engine
        with self._lock:
            engine = self._engines.get(template_type)
            if engine is None:
                factory = self._factories.get(template_type)
                if factory is None:
                    raise TemplateEngineNotFoundError(template_type)
                engine = factory()
                self._engines[template_type] = engine
                logger.debug("Created %s for %s", type(engine).__name__, template_type.value)
        return engine

    def is_configured(self, template_type: TemplateType) -> bool:
        return template_type in self._engines or template_type in self._factories

    # ── Registered keys ──────────────────────────────────────────

    def mark_registered(self, template_type: TemplateType, key: str) -> None:
        self._registered.add((template_type, key))

    def is_registered(self, template_type: TemplateType, key: str) -> bool:
        return (template_type, key) in self._registered

    def registered_keys(self) -> frozenset[tuple[TemplateType, str]]:
        """Snapshot of every registered ``(template_type, key)`` pair."""
        return frozenset(self._registered)


__all__ = ["DEFAULT_ENGINE_FACTORIES", "EngineFactory", "EngineRegistry"]
