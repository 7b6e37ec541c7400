"""Template engine port."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..contract import EngineCapability


@runtime_checkable
class ITemplateEngine(Protocol):
    """
    Protocol for compiling and evaluating templates.

    Each implementation owns a private table of compiled templates keyed by
    template id. Optional extension points are advertised through
    ``capabilities``; calling one that is missing raises
    FunctionalityNotSupportedError instead of silently doing nothing.

    Implementations: JinjaTemplateEngine, HandlebarsTemplateEngine.
    """

    capabilities: frozenset[EngineCapability]

    def supports(self, capability: EngineCapability) -> bool:
        """Return whether ``capability`` is available on this engine."""
        ...

    def register_template(
        self,
        template_id: str,
        template: str,
        options: dict[str, Any] | None = None,
    ) -> None:
        """Compile ``template`` and store it under ``template_id``, replacing any previous one."""
        ...

    def apply_template(self, template_id: str, data_model: Any) -> str:
        """Render the template stored under ``template_id`` with ``data_model``."""
        ...

    def has_template(self, template_id: str) -> bool:
        """Return whether a compiled template is stored under ``template_id``."""
        ...

    def register_helper(self, helper_name: str, helper_func: Any) -> None:
        """Make a custom function callable from template bodies."""
        ...

    def register_tag(self, tag_name: str, tag_options: Any) -> None:
        """Add a custom block/extension construct."""
        ...
