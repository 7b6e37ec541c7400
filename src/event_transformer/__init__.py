"""Template-driven rendering of chat cards and event payloads from event data."""

from __future__ import annotations

from .config import DEFAULT_SETTINGS, TransformerSettings
from .contract import ClientType, EngineCapability, ErrorKind, TemplateType
from .engines import HandlebarsTemplateEngine, JinjaTemplateEngine
from .exceptions import (
    ContentAccessDeniedError,
    ContentNotFoundError,
    ContentSourceError,
    DeliveryError,
    FunctionalityNotSupportedError,
    InvalidEventDataError,
    ManifestError,
    TemplateCompilationError,
    TemplateEngineNotFoundError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRenderError,
    TransformerError,
)
from .keys import build_key
from .manager import TemplateManager
from .ports import IContentSource, IPayloadSender, ITemplateEngine
from .sanitization import parse_event_data, redact_secrets
from .sources import GitHubContentSource, LocalContentSource
from .transformer import (
    CardRenderer,
    CardRendererConfigEntry,
    CustomEngineOptions,
    CustomTemplatingOptions,
    EngineRegistry,
    EventTransformConfigEntry,
    EventTransformer,
    TemplateManifest,
    TemplateSelector,
    Transformer,
)

__all__ = [
    "CardRenderer",
    "CardRendererConfigEntry",
    "ClientType",
    "ContentAccessDeniedError",
    "ContentNotFoundError",
    "ContentSourceError",
    "CustomEngineOptions",
    "CustomTemplatingOptions",
    "DEFAULT_SETTINGS",
    "DeliveryError",
    "EngineCapability",
    "EngineRegistry",
    "ErrorKind",
    "EventTransformConfigEntry",
    "EventTransformer",
    "FunctionalityNotSupportedError",
    "GitHubContentSource",
    "HandlebarsTemplateEngine",
    "IContentSource",
    "IPayloadSender",
    "ITemplateEngine",
    "InvalidEventDataError",
    "JinjaTemplateEngine",
    "LocalContentSource",
    "ManifestError",
    "TemplateCompilationError",
    "TemplateEngineNotFoundError",
    "TemplateError",
    "TemplateManager",
    "TemplateManifest",
    "TemplateNotFoundError",
    "TemplateRenderError",
    "TemplateSelector",
    "TemplateType",
    "Transformer",
    "TransformerError",
    "TransformerSettings",
    "build_key",
    "parse_event_data",
    "redact_secrets",
]
