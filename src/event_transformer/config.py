"""Settings shared by the template manager, sources and senders."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransformerSettings:
    """Configuration for template lookup and GitHub access.

    Attributes:
        manifest_name: Path of the template manifest inside the source.
        card_template_root: Directory holding card templates
            (``{root}/{client_type}/{template_type}/{template_name}``).
        event_template_root: Directory holding event templates
            (``{root}/{template_type}/{template_name}``).
        github_api_url: Base URL of the GitHub REST API.
        timeout: HTTP timeout in seconds for fetches and deliveries.
        user_agent: User-Agent header sent to GitHub and webhooks.
    """

    manifest_name: str = "TransformerConfig.json"
    card_template_root: str = "CardTemplate"
    event_template_root: str = "EventTemplate"
    github_api_url: str = "https://api.github.com"
    timeout: float = 10.0
    user_agent: str = "event-transformer/0.1.0"


DEFAULT_SETTINGS = TransformerSettings()

__all__ = ["DEFAULT_SETTINGS", "TransformerSettings"]
