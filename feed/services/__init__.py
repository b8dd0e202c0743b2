"""Services for the feed notification engine."""

from feed.services.identity import ActorIdentity, IdentityLookup
from feed.services.notifications import InboxSummary, NotificationPage, NotificationService

__all__ = [
    "ActorIdentity",
    "IdentityLookup",
    "InboxSummary",
    "NotificationPage",
    "NotificationService",
]
