"""User model, the identity directory notifications are enriched from."""

import uuid

from sqlalchemy import (
    TIMESTAMP,
    CheckConstraint,
    Column,
    String,
    Text,
    Uuid,
    func,
)

from feed.database import Base
from feed.timeutils import utcnow


class User(Base):
    """User account model."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    handle = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True)
    display_name = Column(Text, nullable=False)
    bio = Column(Text)
    avatar_key = Column(Text)
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("length(handle) BETWEEN 1 AND 32", name="ck_users_handle_length"),
    )
