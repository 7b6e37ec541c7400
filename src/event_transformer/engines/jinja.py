"""Jinja2 template engine."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError
from jinja2.ext import Extension
from jinja2.utils import import_string

from ..contract import EngineCapability
from ..exceptions import (
    TemplateCompilationError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from ..ports.engine import ITemplateEngine

logger = logging.getLogger(__name__)


class JinjaTemplateEngine(ITemplateEngine):
    """
    Compiles and renders templates with Jinja2.

    Supports custom helpers (registered as both filters and globals) and
    custom tags (Jinja2 extensions). Filters are resolved when a template is
    compiled, so helpers and tags must be registered before the templates
    that use them. Undefined variables raise instead of rendering empty.
    """

    capabilities = frozenset({EngineCapability.HELPERS, EngineCapability.TAGS})

    def __init__(self, *, autoescape: bool = False) -> None:
        self._env = Environment(
            undefined=StrictUndefined,
            autoescape=autoescape,
            keep_trailing_newline=True,
        )
        self._templates: dict[str, Template] = {}

    def supports(self, capability: EngineCapability) -> bool:
        return capability in self.capabilities

    def register_template(
        self,
        template_id: str,
        template: str,
        options: dict[str, Any] | None = None,
    ) -> None:
        """
        Compile and store the template.

        ``options`` are bound as globals of this template only.
        """
        try:
            compiled = self._env.from_string(template, globals=options)
        except TemplateSyntaxError as e:
            raise TemplateCompilationError(
                f"Invalid Jinja template {template_id!r} (line {e.lineno}): {e.message}",
                template_id=template_id,
            ) from e
        if template_id in self._templates:
            logger.debug("Replacing Jinja template %s", template_id)
        self._templates[template_id] = compiled

    def apply_template(self, template_id: str, data_model: Any) -> str:
        compiled = self._templates.get(template_id)
        if compiled is None:
            raise TemplateNotFoundError(
                f"No Jinja template registered with id {template_id!r}",
                template_id=template_id,
            )
        try:
            # Non-mapping payloads (e.g. JSON arrays) are exposed as ``data``.
            if isinstance(data_model, Mapping):
                return compiled.render(data_model)
            return compiled.render(data=data_model)
        except Exception as e:
            logger.error(f"Jinja2 rendering failed for {template_id}: {e}")
            raise TemplateRenderError(str(e), template_id=template_id) from e

    def has_template(self, template_id: str) -> bool:
        return template_id in self._templates

    def register_helper(self, helper_name: str, helper_func: Any) -> None:
        if not callable(helper_func):
            raise TypeError(f"Helper {helper_name!r} must be callable")
        self._env.filters[helper_name] = helper_func
        self._env.globals[helper_name] = helper_func

    def register_tag(self, tag_name: str, tag_options: Any) -> None:
        """
        Register a custom tag.

        ``tag_options`` is a Jinja2 ``Extension`` subclass (or its import
        path) whose ``tags`` include ``tag_name``.
        """
        extension = import_string(tag_options) if isinstance(tag_options, str) else tag_options
        if not (isinstance(extension, type) and issubclass(extension, Extension)):
            raise TypeError(f"Tag {tag_name!r} must be provided by a jinja2 Extension subclass")
        if tag_name not in extension.tags:
            raise ValueError(f"{extension.__name__} does not define the tag {tag_name!r}")
        self._env.add_extension(extension)
