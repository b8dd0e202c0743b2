"""Pydantic schemas for outbound notification records."""

from feed.schemas.notifications import (
    InboxSummaryResponse,
    ListNotificationsResponse,
    MarkAllReadResponse,
    MarkReadResponse,
    NotificationItem,
)

__all__ = [
    "NotificationItem",
    "ListNotificationsResponse",
    "InboxSummaryResponse",
    "MarkReadResponse",
    "MarkAllReadResponse",
]
