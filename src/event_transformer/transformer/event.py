"""Event transformer: generic event JSON from event data."""

from __future__ import annotations

from typing import Any

from ..contract import TemplateType
from ..exceptions import (
    TemplateEngineNotFoundError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from ..keys import build_key
from .base import Transformer
from .models import EventTransformConfigEntry


class EventTransformer(Transformer[EventTransformConfigEntry]):
    """Renders a new event payload with the registered templates."""

    KEY_PREFIX = "event"

    def construct_event_json(
        self,
        template_type: TemplateType,
        source_type: str,
        event_json: Any,
    ) -> str:
        """
        Construct a new event payload from event data.

        Raises TemplateNotFoundError, TemplateEngineNotFoundError or
        TemplateRenderError, naming the template and source types.
        """
        key = build_key(self.KEY_PREFIX, template_type, source_type)
        try:
            return self.apply_template(template_type, key, event_json)
        except TemplateNotFoundError as e:
            raise TemplateNotFoundError(
                f"No template found for Template Type: {template_type.value} "
                f"and Source Type: {source_type}",
                template_type=template_type,
                source_type=source_type,
                template_id=key,
            ) from e
        except TemplateEngineNotFoundError:
            raise
        except Exception as e:
            raise TemplateRenderError(
                f"Error applying template for Template Type: {template_type.value} "
                f"and Source Type: {source_type} with error message {e}",
                template_type=template_type,
                source_type=source_type,
                template_id=key,
            ) from e

    def template_key(self, entry: EventTransformConfigEntry) -> str:
        return build_key(self.KEY_PREFIX, entry.template_type, entry.source_type)

    def template_path(self, entry: EventTransformConfigEntry) -> str:
        return (
            f"{self.settings.event_template_root}/"
            f"{entry.template_type.value}/{entry.template_name}"
        )
