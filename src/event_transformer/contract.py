"""Classification enums shared by the engines and the transformers."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

_E = TypeVar("_E", bound="_ParsableEnum")


class _ParsableEnum(Enum):
    @classmethod
    def parse(cls: type[_E], text: str) -> _E:
        """Resolve a member from its value or its name (case-insensitive)."""
        needle = text.strip().lower()
        for member in cls:
            if needle in (str(member.value).lower(), member.name.lower()):
                return member
        allowed = ", ".join(str(m.value) for m in cls)
        raise ValueError(f"Unknown {cls.__name__} {text!r}. Expected one of: {allowed}")


class TemplateType(_ParsableEnum):
    """Template engine a template is written for."""

    HANDLEBARS = "HandleBars"
    JINJA = "Jinja"

    @classmethod
    def parse(cls, text: str) -> TemplateType:
        if text.strip().lower() == "liquid":
            raise ValueError(
                "Liquid templates are not supported; port them to Jinja, "
                "which uses the same {{ }} and {% %} delimiters"
            )
        return super().parse(text)


class ClientType(_ParsableEnum):
    """Messaging surface a card is rendered for."""

    SLACK = "slack"
    TEAMS = "teams"


class EngineCapability(Enum):
    """Optional extension points an engine may support."""

    HELPERS = "helpers"
    TAGS = "tags"


class ErrorKind(Enum):
    """Kind tag carried by every template error."""

    TEMPLATE_NOT_FOUND = "template_not_found"
    TEMPLATE_ENGINE_NOT_FOUND = "template_engine_not_found"
    TEMPLATE_RENDER_ERROR = "template_render_error"
    TEMPLATE_COMPILATION_ERROR = "template_compilation_error"
    FUNCTIONALITY_NOT_SUPPORTED = "functionality_not_supported"


__all__ = ["ClientType", "EngineCapability", "ErrorKind", "TemplateType"]
