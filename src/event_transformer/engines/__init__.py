"""Template engine implementations."""

from __future__ import annotations

from .handlebars import HandlebarsTemplateEngine
from .jinja import JinjaTemplateEngine

__all__ = ["HandlebarsTemplateEngine", "JinjaTemplateEngine"]
