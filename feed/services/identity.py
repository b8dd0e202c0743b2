"""Actor identity lookup backed by the users table."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feed.models.user import User


@dataclass(frozen=True)
class ActorIdentity:
    """Public identity of the user who triggered an event."""

    handle: str
    display_name: str


class IdentityDirectory(Protocol):
    """Anything that can resolve an actor id to its public identity."""

    async def get(self, actor_id: UUID) -> ActorIdentity | None: ...


class IdentityLookup:
    """Resolve actors against the ``users`` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, actor_id: UUID) -> ActorIdentity | None:
        result = await self.db.execute(
            select(User.handle, User.display_name).where(User.id == actor_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return ActorIdentity(handle=row.handle, display_name=row.display_name)
