"""Payload sender port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..delivery.records import DeliveryRecord


@runtime_checkable
class IPayloadSender(Protocol):
    """
    Port for delivering a rendered payload to its destination.

    Adapters must explicitly declare: class WebhookSender(IPayloadSender):
    """

    async def send(
        self,
        target: str,
        payload: Any,
        metadata: dict[str, object] | None = None,
    ) -> DeliveryRecord:
        """Send the payload and return a delivery record."""
        ...
