"""
Test data factories for the feed notification engine.

Notifications are inserted with explicit timestamps so ordering tests don't
depend on clock resolution.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feed.models.notification import Notification
from feed.models.user import User

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def at(seconds: int) -> datetime:
    """Timestamp ``seconds`` after BASE_TIME."""
    return BASE_TIME + timedelta(seconds=seconds)


async def create_user(
    db_session: AsyncSession,
    handle: str,
    display_name: str,
) -> User:
    user = User(
        handle=handle,
        email=f"{handle}@example.com",
        display_name=display_name,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def insert_notification(
    db_session: AsyncSession,
    recipient_id: UUID,
    created_at: datetime,
    *,
    notification_id: UUID | None = None,
    notification_type: str = "like",
    payload: Any = None,
    read_at: datetime | None = None,
) -> Notification:
    """Insert a notification row directly, bypassing the enrichment policy."""
    notification = Notification(
        id=notification_id or uuid4(),
        recipient_id=recipient_id,
        notification_type=notification_type,
        payload=payload if payload is not None else {},
        created_at=created_at,
        read_at=read_at,
    )
    db_session.add(notification)
    await db_session.commit()
    return notification


async def insert_series(
    db_session: AsyncSession,
    recipient_id: UUID,
    count: int,
    start: int = 0,
) -> list[Notification]:
    """Insert ``count`` notifications one second apart, oldest first."""
    return [
        await insert_notification(db_session, recipient_id, at(start + i))
        for i in range(count)
    ]


async def count_notifications(db_session: AsyncSession, recipient_id: UUID | None = None) -> int:
    query = select(func.count(Notification.id))
    if recipient_id is not None:
        query = query.where(Notification.recipient_id == recipient_id)
    result = await db_session.execute(query)
    return result.scalar() or 0
