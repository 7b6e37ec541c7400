"""Delivery of rendered payloads."""

from __future__ import annotations

from .dispatch import RepositoryDispatchSender
from .records import DeliveryRecord, DeliveryStatus
from .webhook import WebhookSender

__all__ = [
    "DeliveryRecord",
    "DeliveryStatus",
    "RepositoryDispatchSender",
    "WebhookSender",
]
