"""Chat webhook sender with HMAC signature."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from typing import Any

import httpx

from ..config import DEFAULT_SETTINGS, TransformerSettings
from ..ports.sender import IPayloadSender
from ..transport import http_client
from .records import DeliveryRecord

logger = logging.getLogger(__name__)


class WebhookSender(IPayloadSender):
    """
    Posts a rendered card to an incoming-webhook URL (Slack, Teams).

    When a ``secret`` is configured the exact request body is signed with
    HMAC-SHA256 and sent in ``X-Webhook-Signature`` as ``sha256=<hex>``.
    """

    def __init__(
        self,
        secret: str | None = None,
        *,
        settings: TransformerSettings = DEFAULT_SETTINGS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.secret = secret
        self.settings = settings
        self._client = client

    async def send(
        self,
        target: str,
        payload: Any,
        metadata: dict[str, object] | None = None,
    ) -> DeliveryRecord:
        body = json.dumps(payload, separators=(",", ":"), sort_keys=True)
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.settings.user_agent,
        }
        for name, value in (metadata or {}).items():
            headers[f"X-Event-{name.replace('_', '-').title()}"] = str(value)
        if self.secret:
            headers["X-Webhook-Signature"] = self.calculate_signature(body, self.secret)

        try:
            async with http_client(self._client, self.settings.timeout) as client:
                response = await client.post(target, content=body.encode("utf-8"), headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Webhook HTTP error: {e.response.status_code} - {e.response.text}")
            return DeliveryRecord.failed(target, error=f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook to {target}: {e}")
            return DeliveryRecord.failed(target, error=str(e))

        logger.info(f"Webhook sent successfully to {target}")
        return DeliveryRecord.sent(target, provider_id=response.headers.get("X-Request-ID"))

    @staticmethod
    def calculate_signature(payload: str, secret: str) -> str:
        digest = hmac.new(
            key=secret.encode("utf-8"),
            msg=payload.encode("utf-8"),
            digestmod=hashlib.sha256,
        ).hexdigest()
        return f"sha256={digest}"

    @staticmethod
    def verify_signature(payload: str, signature: str, secret: str) -> bool:
        """
        Verify a webhook signature using constant-time comparison.

        Use this in receivers to authenticate incoming cards.
        """
        expected = WebhookSender.calculate_signature(payload, secret)
        return hmac.compare_digest(expected, signature)
