"""Template registration and rendering pipelines."""

from __future__ import annotations

from .base import Transformer
from .card import CardRenderer
from .event import EventTransformer
from .models import (
    CardRendererConfigEntry,
    ConfigEntry,
    CustomEngineOptions,
    CustomTemplatingOptions,
    EventTransformConfigEntry,
    TemplateConfigEntry,
    TemplateManifest,
    TemplateSelector,
)
from .registry import EngineRegistry

__all__ = [
    "CardRenderer",
    "CardRendererConfigEntry",
    "ConfigEntry",
    "CustomEngineOptions",
    "CustomTemplatingOptions",
    "EngineRegistry",
    "EventTransformConfigEntry",
    "EventTransformer",
    "TemplateConfigEntry",
    "TemplateManifest",
    "TemplateSelector",
    "Transformer",
]
