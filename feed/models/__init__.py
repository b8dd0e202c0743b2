"""Database models for the feed notification engine."""

from feed.models.notification import Notification
from feed.models.user import User

__all__ = [
    "User",
    "Notification",
]
