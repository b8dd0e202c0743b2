"""Notification ingestion, keyset listing and read-state transitions."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from feed.config import settings
from feed.models.notification import Notification
from feed.pagination import Cursor
from feed.services.identity import IdentityDirectory, IdentityLookup
from feed.services.payload import JSONValue, actor_fields, merge_if_mapping
from feed.timeutils import utcnow

logger = logging.getLogger(__name__)


@dataclass
class NotificationPage:
    """One page of a recipient's stream, newest first."""

    items: list[Notification] = field(default_factory=list)
    next_cursor: Cursor | None = None
    has_more: bool = False


@dataclass(frozen=True)
class InboxSummary:
    unread_count: int
    total_count: int


def _validate_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")


class NotificationService:
    """
    Service for creating and reading a recipient's notifications.

    A service instance wraps a single session and runs one operation at a
    time. Concurrent callers should each open their own session from
    ``AsyncSessionLocal``; every write is one statement followed by a commit.
    """

    def __init__(
        self,
        db: AsyncSession,
        identity: IdentityDirectory | None = None,
        *,
        notify_on_missing_actor: bool | None = None,
    ):
        self.db = db
        self.identity = identity if identity is not None else IdentityLookup(db)
        if notify_on_missing_actor is None:
            notify_on_missing_actor = settings.notify_on_missing_actor
        self.notify_on_missing_actor = notify_on_missing_actor

    @asynccontextmanager
    async def _write(self) -> AsyncIterator[None]:
        """Commit the enclosed statement, rolling back if the store fails."""
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    # --- Ingestion ---

    async def create(
        self,
        recipient_id: UUID,
        notification_type: str,
        payload: JSONValue,
    ) -> Notification:
        """Insert a notification unconditionally; id and created_at come from the store."""
        notification = Notification(
            recipient_id=recipient_id,
            notification_type=notification_type,
            payload=payload,
        )
        async with self._write():
            self.db.add(notification)
        await self.db.refresh(notification)

        logger.info(
            "Created %s notification %s for recipient %s",
            notification_type,
            notification.id,
            recipient_id,
        )
        return notification

    async def create_if_not_self(
        self,
        recipient_id: UUID,
        actor_id: UUID,
        notification_type: str,
        payload: JSONValue,
    ) -> Notification | None:
        """
        Create a notification attributed to ``actor_id``.

        Nothing is written when the actor is the recipient, or when the actor
        can no longer be found (unless ``notify_on_missing_actor`` is set).
        Both cases return None and are not errors.

        When the actor exists and the payload is a mapping, the actor's id,
        handle and display name are copied into it as of now; later profile
        changes are not reflected. Non-mapping payloads are stored as given.
        """
        if actor_id == recipient_id:
            logger.debug("Suppressed self-%s notification for %s", notification_type, actor_id)
            return None

        identity = await self.identity.get(actor_id)
        if identity is None:
            if not self.notify_on_missing_actor:
                logger.debug(
                    "Suppressed %s notification for %s: actor %s not found",
                    notification_type,
                    recipient_id,
                    actor_id,
                )
                return None
            return await self.create(recipient_id, notification_type, payload)

        payload, merged = merge_if_mapping(payload, actor_fields(actor_id, identity))
        if not merged:
            logger.debug(
                "Payload for %s notification is not a mapping, skipping actor enrichment",
                notification_type,
            )

        return await self.create(recipient_id, notification_type, payload)

    async def notify_like(
        self, recipient_id: UUID, actor_id: UUID, post_id: UUID
    ) -> Notification | None:
        return await self.create_if_not_self(
            recipient_id, actor_id, "like", {"post_id": str(post_id)}
        )

    async def notify_comment(
        self, recipient_id: UUID, actor_id: UUID, post_id: UUID, comment_id: UUID
    ) -> Notification | None:
        return await self.create_if_not_self(
            recipient_id,
            actor_id,
            "comment",
            {"post_id": str(post_id), "comment_id": str(comment_id)},
        )

    async def notify_follow(self, recipient_id: UUID, actor_id: UUID) -> Notification | None:
        return await self.create_if_not_self(recipient_id, actor_id, "follow", {})

    async def notify_mention(
        self, recipient_id: UUID, actor_id: UUID, post_id: UUID
    ) -> Notification | None:
        return await self.create_if_not_self(
            recipient_id, actor_id, "mention", {"post_id": str(post_id)}
        )

    # --- Listing ---

    def _stream_query(self, recipient_id: UUID, cursor: Cursor | None, unread_only: bool):
        query = select(Notification).where(Notification.recipient_id == recipient_id)

        if unread_only:
            query = query.where(Notification.read_at.is_(None))

        # Seek past the last observed row: strictly older, or same instant with a smaller id
        if cursor is not None:
            query = query.where(
                or_(
                    Notification.created_at < cursor.created_at,
                    and_(
                        Notification.created_at == cursor.created_at,
                        Notification.id < cursor.id,
                    ),
                )
            )

        return query.order_by(Notification.created_at.desc(), Notification.id.desc())

    async def list(
        self,
        recipient_id: UUID,
        cursor: Cursor | None,
        limit: int,
    ) -> list[Notification]:
        """
        Return up to ``limit`` notifications ordered newest first.

        Ties on ``created_at`` are ordered by id descending. Passing
        ``Cursor.from_notification(page[-1])`` yields the following page with
        no overlap or gap, even if newer notifications arrive in between.
        """
        _validate_limit(limit)
        result = await self.db.execute(
            self._stream_query(recipient_id, cursor, unread_only=False).limit(limit)
        )
        return list(result.scalars().all())

    async def list_page(
        self,
        recipient_id: UUID,
        cursor: Cursor | None = None,
        limit: int | None = None,
        unread_only: bool = False,
    ) -> NotificationPage:
        """List one page and report whether more rows follow it."""
        if limit is None:
            limit = settings.default_page_size
        _validate_limit(limit)

        result = await self.db.execute(
            self._stream_query(recipient_id, cursor, unread_only).limit(limit + 1)
        )
        notifications = list(result.scalars().all())

        # Check if there are more items
        has_more = len(notifications) > limit
        if has_more:
            notifications = notifications[:limit]

        next_cursor = Cursor.from_notification(notifications[-1]) if has_more else None
        return NotificationPage(items=notifications, next_cursor=next_cursor, has_more=has_more)

    async def summary(self, recipient_id: UUID) -> InboxSummary:
        """Unread and total counts for the recipient's inbox."""
        unread_result = await self.db.execute(
            select(func.count(Notification.id)).where(
                Notification.recipient_id == recipient_id,
                Notification.read_at.is_(None),
            )
        )
        unread_count = unread_result.scalar() or 0

        total_result = await self.db.execute(
            select(func.count(Notification.id)).where(Notification.recipient_id == recipient_id)
        )
        total_count = total_result.scalar() or 0

        return InboxSummary(unread_count=unread_count, total_count=total_count)

    # --- Read state ---

    async def mark_read(self, notification_id: UUID, recipient_id: UUID) -> bool:
        """
        Mark one notification read if it belongs to the recipient and is unread.

        The ownership and unread checks are part of a single UPDATE, so of two
        concurrent calls at most one returns True. False covers not found,
        someone else's notification, and already read alike; it is not an
        authorization check.
        """
        async with self._write():
            result = await self.db.execute(
                update(Notification)
                .where(
                    Notification.id == notification_id,
                    Notification.recipient_id == recipient_id,
                    Notification.read_at.is_(None),
                )
                .values(read_at=utcnow())
            )

        marked = result.rowcount > 0
        logger.debug(
            "mark_read %s for recipient %s: %s",
            notification_id,
            recipient_id,
            "marked" if marked else "no change",
        )
        return marked

    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Mark every unread notification of the recipient read; returns how many changed."""
        async with self._write():
            result = await self.db.execute(
                update(Notification)
                .where(
                    Notification.recipient_id == recipient_id,
                    Notification.read_at.is_(None),
                )
                .values(read_at=utcnow())
            )

        logger.debug("Marked %d notifications read for recipient %s", result.rowcount, recipient_id)
        return result.rowcount
