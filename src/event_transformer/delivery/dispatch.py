"""GitHub repository_dispatch sender."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import DEFAULT_SETTINGS, TransformerSettings
from ..exceptions import DeliveryError
from ..ports.sender import IPayloadSender
from ..sources.github import GITHUB_API_VERSION
from ..transport import http_client
from .records import DeliveryRecord

logger = logging.getLogger(__name__)


class RepositoryDispatchSender(IPayloadSender):
    """
    Publishes a rendered payload as a ``repository_dispatch`` event.

    ``target`` is the receiving repository (``owner/name``); workflows there
    subscribe with ``on: repository_dispatch: types: [<event_type>]``.
    """

    def __init__(
        self,
        access_token: str,
        *,
        event_type: str = "custom",
        settings: TransformerSettings = DEFAULT_SETTINGS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.access_token = access_token
        self.event_type = event_type
        self.settings = settings
        self._client = client

    def dispatch_url(self, repository: str) -> str:
        return f"{self.settings.github_api_url.rstrip('/')}/repos/{repository}/dispatches"

    async def send(
        self,
        target: str,
        payload: Any,
        metadata: dict[str, object] | None = None,
    ) -> DeliveryRecord:
        if not self.access_token:
            raise DeliveryError("An access token is required for repository_dispatch")
        if not isinstance(payload, dict):
            raise DeliveryError("repository_dispatch client_payload must be a JSON object")

        event_type = str((metadata or {}).get("event_type") or self.event_type)
        body = {"event_type": event_type, "client_payload": payload}
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.access_token}",
            "User-Agent": self.settings.user_agent,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

        try:
            async with http_client(self._client, self.settings.timeout) as client:
                response = await client.post(self.dispatch_url(target), json=body, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"repository_dispatch HTTP error: {e.response.status_code} - {e.response.text}"
            )
            return DeliveryRecord.failed(target, error=f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to dispatch {event_type} to {target}: {e}")
            return DeliveryRecord.failed(target, error=str(e))

        logger.info(f"Dispatched {event_type} event to {target}")
        return DeliveryRecord.sent(target, provider_id=response.headers.get("X-GitHub-Request-Id"))
