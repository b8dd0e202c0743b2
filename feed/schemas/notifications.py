"""Outbound notification records for transport and UI layers."""

from typing import Any

from pydantic import BaseModel

from feed.models.notification import Notification
from feed.services.notifications import InboxSummary, NotificationPage
from feed.timeutils import format_timestamp


class NotificationItem(BaseModel):
    """Single notification item."""

    id: str
    recipient_id: str
    notification_type: str
    payload: Any
    read_at: str | None
    created_at: str

    @classmethod
    def from_model(cls, notification: Notification) -> "NotificationItem":
        return cls(
            id=str(notification.id),
            recipient_id=str(notification.recipient_id),
            notification_type=notification.notification_type,
            payload=notification.payload,
            read_at=format_timestamp(notification.read_at) if notification.read_at else None,
            created_at=format_timestamp(notification.created_at),
        )


class ListNotificationsResponse(BaseModel):
    """Response for listing notifications."""

    items: list[NotificationItem]
    next_cursor: str | None
    has_more: bool

    @classmethod
    def from_page(cls, page: NotificationPage) -> "ListNotificationsResponse":
        return cls(
            items=[NotificationItem.from_model(n) for n in page.items],
            next_cursor=page.next_cursor.encode() if page.next_cursor else None,
            has_more=page.has_more,
        )


class InboxSummaryResponse(BaseModel):
    """Response for inbox summary."""

    unread_count: int
    total_count: int

    @classmethod
    def from_summary(cls, summary: InboxSummary) -> "InboxSummaryResponse":
        return cls(unread_count=summary.unread_count, total_count=summary.total_count)


class MarkReadResponse(BaseModel):
    """Response for marking a notification as read."""

    id: str
    marked: bool


class MarkAllReadResponse(BaseModel):
    """Response for marking all notifications as read."""

    marked_count: int
