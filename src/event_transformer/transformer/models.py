"""Manifest entries and engine customisation options."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..contract import ClientType, TemplateType
from ..exceptions import ManifestError


class TemplateConfigEntry(BaseModel):
    """Fields shared by every manifest record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    template_type: TemplateType = Field(alias="TemplateType")
    source_type: str = Field(alias="SourceType", min_length=1)
    template_name: str = Field(alias="TemplateName", min_length=1)

    @field_validator("template_type", mode="before")
    @classmethod
    def _parse_template_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return TemplateType.parse(value)
        return value


class EventTransformConfigEntry(TemplateConfigEntry):
    """Manifest record of an event template."""


class CardRendererConfigEntry(TemplateConfigEntry):
    """Manifest record of a card template for one messaging client."""

    client_type: ClientType = Field(alias="ClientType")

    @field_validator("client_type", mode="before")
    @classmethod
    def _parse_client_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ClientType.parse(value)
        return value


ConfigEntry = CardRendererConfigEntry | EventTransformConfigEntry


class TemplateManifest(BaseModel):
    """Ordered list of template registrations."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[ConfigEntry, ...] = ()

    @classmethod
    def parse(cls, text: str) -> TemplateManifest:
        """
        Parse manifest JSON.

        Accepts a JSON array of records or an object with a ``templates``
        array. Records with a ``ClientType`` are card entries, the others
        event entries.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Manifest is not valid JSON: {e}") from e

        if isinstance(raw, dict):
            raw = raw.get("templates")
        if not isinstance(raw, list):
            raise ManifestError("Manifest must be a JSON array of template entries")

        entries: list[ConfigEntry] = []
        for index, record in enumerate(raw):
            if not isinstance(record, dict):
                raise ManifestError(f"Manifest entry {index} is not an object")
            model: type[TemplateConfigEntry] = (
                CardRendererConfigEntry if record.get("ClientType") else EventTransformConfigEntry
            )
            try:
                entries.append(model.model_validate(record))  # type: ignore[arg-type]
            except ValidationError as e:
                raise ManifestError(f"Invalid manifest entry {index}: {e}") from e
        return cls(entries=tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)


class TemplateSelector(BaseModel):
    """Restricts setup to the manifest entries one invocation needs.

    ``None`` fields match anything.
    """

    model_config = ConfigDict(frozen=True)

    template_type: TemplateType | None = None
    source_type: str | None = None
    client_type: ClientType | None = None

    def matches(self, entry: ConfigEntry) -> bool:
        if self.template_type is not None and entry.template_type is not self.template_type:
            return False
        if self.source_type is not None and entry.source_type != self.source_type:
            return False
        if self.client_type is not None:
            return getattr(entry, "client_type", None) is self.client_type
        return True


class CustomEngineOptions(BaseModel):
    """Helpers and tags to install on one engine before templates compile."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    template_type: TemplateType
    helpers: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    tags: dict[str, Any] = Field(default_factory=dict)


class CustomTemplatingOptions(BaseModel):
    """Engine customisation applied by TemplateManager.setup."""

    model_config = ConfigDict(frozen=True)

    engine_options: list[CustomEngineOptions] = Field(default_factory=list)


__all__ = [
    "CardRendererConfigEntry",
    "TemplateConfigEntry",
    "ConfigEntry",
    "CustomEngineOptions",
    "CustomTemplatingOptions",
    "EventTransformConfigEntry",
    "TemplateManifest",
    "TemplateSelector",
]
