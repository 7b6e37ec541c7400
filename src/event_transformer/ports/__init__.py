"""Port definitions for event-transformer."""

from __future__ import annotations

from .engine import ITemplateEngine
from .sender import IPayloadSender
from .source import IContentSource

__all__ = [
    "IContentSource",
    "IPayloadSender",
    "ITemplateEngine",
]
