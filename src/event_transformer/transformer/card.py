"""Card renderer: chat client cards (Slack, Teams) from event data."""

from __future__ import annotations

from typing import Any

from ..contract import ClientType, TemplateType
from ..exceptions import (
    TemplateEngineNotFoundError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from ..keys import build_key
from .base import Transformer
from .models import CardRendererConfigEntry


class CardRenderer(Transformer[CardRendererConfigEntry]):
    """Renders a card for a messaging client with the registered templates."""

    KEY_PREFIX = "card"

    def construct_card_json(
        self,
        template_type: TemplateType,
        source_type: str,
        client_type: ClientType,
        event_json: Any,
    ) -> str:
        """
        Construct a card for a messaging client from event data.

        Args:
            template_type: Template engine to use, e.g. HandleBars or Jinja.
            source_type: Originating event, e.g. ``PullRequest_Opened``.
            client_type: Targeted client, e.g. Slack or Teams.
            event_json: Event data to plug into the template.

        Returns:
            The rendered template.

        Raises:
            TemplateNotFoundError: No template for the three values.
            TemplateEngineNotFoundError: No engine for ``template_type``.
            TemplateRenderError: The template failed to evaluate.
        """
        key = build_key(self.KEY_PREFIX, template_type, source_type, client_type)
        try:
            return self.apply_template(template_type, key, event_json)
        except TemplateNotFoundError as e:
            raise TemplateNotFoundError(
                f"No template found for Template Type: {template_type.value}, "
                f"Source Type: {source_type} and Client Type: {client_type.value}",
                template_id=key,
                template_type=template_type,
                source_type=source_type,
                client_type=client_type,
            ) from e
        except TemplateEngineNotFoundError:
            raise
        except Exception as e:
            raise TemplateRenderError(
                f"Error applying template for Template Type: {template_type.value}, "
                f"Source Type: {source_type} and Client Type: {client_type.value} "
                f"with error message {e}",
                template_id=key,
                template_type=template_type,
                source_type=source_type,
                client_type=client_type,
            ) from e

    def template_key(self, entry: CardRendererConfigEntry) -> str:
        return build_key(self.KEY_PREFIX, entry.template_type, entry.source_type, entry.client_type)

    def template_path(self, entry: CardRendererConfigEntry) -> str:
        return (
            f"{self.settings.card_template_root}/{entry.client_type.value}/"
            f"{entry.template_type.value}/{entry.template_name}"
        )
