"""Notification model for the feed inbox."""

import uuid

from sqlalchemy import (
    JSON,
    TIMESTAMP,
    Column,
    ForeignKey,
    Index,
    String,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

from feed.database import Base
from feed.timeutils import utcnow


class Notification(Base):
    """
    A single user-facing event addressed to one recipient.

    ``id`` and ``created_at`` are assigned at insert by the ORM defaults, and
    ``read_at`` by the service, all from the application clock in UTC. The
    server defaults only apply to rows written with raw SQL.
    """

    __tablename__ = "notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recipient_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    notification_type = Column(String, nullable=False)  # e.g., "like", "comment", "follow"
    payload = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    read_at = Column(TIMESTAMP(timezone=True))

    __table_args__ = (
        Index(
            "idx_notifications_recipient_keyset",
            recipient_id,
            created_at.desc(),
            id.desc(),
        ),
        Index(
            "idx_notifications_unread",
            recipient_id,
            created_at.desc(),
            postgresql_where=(read_at.is_(None)),
            sqlite_where=(read_at.is_(None)),
        ),
    )
