"""Handlebars template engine backed by pybars3."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any

from pybars import Compiler

from ..contract import EngineCapability
from ..exceptions import (
    FunctionalityNotSupportedError,
    TemplateCompilationError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from ..ports.engine import ITemplateEngine

logger = logging.getLogger(__name__)

# Built-in block helpers taking exactly one argument.
_SINGLE_ARGUMENT_BLOCKS = frozenset({"if", "unless", "each", "with"})

_WHITESPACE_CONTROL = re.compile(r"^~|~$")


def check_block_structure(template: str) -> None:
    """
    Reject Handlebars text that pybars would silently truncate.

    pybars renders anything its grammar cannot match as nothing, so an
    unterminated mustache or an unclosed block compiles without error.
    This walks the mustaches and raises ValueError when a ``{{`` has no
    ``}}``, blocks do not nest properly, ``else`` appears outside a block,
    or a built-in block helper is not given exactly one argument.
    """
    blocks: list[tuple[str, int]] = []
    pos = 0
    while True:
        start = template.find("{{", pos)
        if start == -1:
            break
        line = template.count("\n", 0, start) + 1
        if start > 0 and template[start - 1] == "\\":
            pos = start + 2
            continue
        if template.startswith("{{!--", start):
            end = template.find("--}}", start + 5)
            if end == -1:
                raise ValueError(f"unterminated comment opened on line {line}")
            pos = end + 4
            continue
        end = template.find("}}", start + 2)
        if end == -1:
            raise ValueError(f"unterminated '{{{{' on line {line}")
        body = template[start + 2 : end]
        if "{{" in body.lstrip("{"):
            raise ValueError(f"unterminated '{{{{' on line {line}")
        pos = end + 2
        if body.startswith("{"):
            if not template.startswith("}", pos):
                raise ValueError(f"unterminated '{{{{{{' on line {line}")
            body = body[1:]
            pos += 1
        body = _WHITESPACE_CONTROL.sub("", body).strip()
        if not body:
            raise ValueError(f"empty expression on line {line}")

        if body[0] in "#^" and len(body) > 1:
            name, *args = body[1:].split()
            if name in _SINGLE_ARGUMENT_BLOCKS and len(args) != 1:
                raise ValueError(f"#{name} on line {line} requires exactly one argument")
            blocks.append((name, line))
        elif body[0] == "/":
            name = body[1:].strip()
            if not blocks:
                raise ValueError(f"'{{{{/{name}}}}}' on line {line} closes no open block")
            opened, opened_line = blocks.pop()
            if name != opened:
                raise ValueError(
                    f"'{{{{/{name}}}}}' on line {line} does not match "
                    f"'{{{{#{opened}}}}}' opened on line {opened_line}"
                )
        elif body == "^" or body == "else" or body.startswith("else "):
            if not blocks:
                raise ValueError(f"'{{{{{body}}}}}' on line {line} is outside any block")

    if blocks:
        name, line = blocks[-1]
        raise ValueError(f"block '{{{{#{name}}}}}' opened on line {line} is never closed")


class HandlebarsTemplateEngine(ITemplateEngine):
    """
    Compiles and renders Handlebars templates.

    Helpers are supported and follow the pybars calling convention
    ``helper(this, *args)``. Custom tags are not part of Handlebars;
    ``register_tag`` always raises FunctionalityNotSupportedError.
    """

    capabilities = frozenset({EngineCapability.HELPERS})

    def __init__(self) -> None:
        self._compiler = Compiler()
        self._templates: dict[str, Callable[..., Any]] = {}
        self._helpers: dict[str, Callable[..., Any]] = {}

    def supports(self, capability: EngineCapability) -> bool:
        return capability in self.capabilities

    def register_template(
        self,
        template_id: str,
        template: str,
        options: dict[str, Any] | None = None,
    ) -> None:
        """Compile and store the template. ``options`` has no effect on pybars."""
        try:
            check_block_structure(template)
            compiled = self._compiler.compile(template)
        except Exception as e:
            raise TemplateCompilationError(
                f"Invalid Handlebars template {template_id!r}: {e}",
                template_id=template_id,
            ) from e
        if template_id in self._templates:
            logger.debug("Replacing Handlebars template %s", template_id)
        self._templates[template_id] = compiled

    def apply_template(self, template_id: str, data_model: Any) -> str:
        compiled = self._templates.get(template_id)
        if compiled is None:
            raise TemplateNotFoundError(
                f"No Handlebars template registered with id {template_id!r}",
                template_id=template_id,
            )
        try:
            return str(compiled(data_model, helpers=self._helpers))
        except Exception as e:
            logger.error(f"Handlebars rendering failed for {template_id}: {e}")
            raise TemplateRenderError(str(e), template_id=template_id) from e

    def has_template(self, template_id: str) -> bool:
        return template_id in self._templates

    def register_helper(self, helper_name: str, helper_func: Any) -> None:
        if not callable(helper_func):
            raise TypeError(f"Helper {helper_name!r} must be callable")
        self._helpers[helper_name] = helper_func

    def register_tag(self, tag_name: str, tag_options: Any = None) -> None:
        raise FunctionalityNotSupportedError(
            type(self).__name__, f"custom tags (requested {tag_name!r})"
        )
