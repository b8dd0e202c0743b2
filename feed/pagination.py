"""Keyset cursors for the notification stream.

A cursor pins the ``(created_at, id)`` sort key of the last notification a
client has seen. Callers hand the encoded form back to fetch the next page;
the token is opaque so clients can't build positions that were never observed.
"""

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from feed.models.notification import Notification
from feed.timeutils import as_utc

_SEPARATOR = "|"


class InvalidCursorError(ValueError):
    """Raised when a cursor token cannot be decoded."""


@dataclass(frozen=True)
class Cursor:
    """Sort-key position of the last item on a page."""

    created_at: datetime
    id: UUID

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", as_utc(self.created_at))

    @classmethod
    def from_notification(cls, notification: Notification) -> "Cursor":
        return cls(created_at=notification.created_at, id=notification.id)

    def encode(self) -> str:
        raw = f"{self.created_at.isoformat()}{_SEPARATOR}{self.id}"
        return base64.urlsafe_b64encode(raw.encode()).decode().rstrip("=")

    @classmethod
    def decode(cls, token: str) -> "Cursor":
        """
        Parse a token produced by :meth:`encode`.

        Raises:
            InvalidCursorError: if the token is not a well-formed cursor
        """
        padded = token + "=" * (-len(token) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode()).decode()
        except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
            raise InvalidCursorError("Malformed cursor token") from exc

        timestamp, sep, identifier = raw.partition(_SEPARATOR)
        if not sep:
            raise InvalidCursorError("Malformed cursor token")

        try:
            created_at = datetime.fromisoformat(timestamp)
            notification_id = UUID(identifier)
        except ValueError as exc:
            raise InvalidCursorError("Malformed cursor token") from exc

        return cls(created_at=created_at, id=notification_id)
