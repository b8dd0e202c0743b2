"""Payload documents and actor enrichment."""

from collections.abc import Mapping
from typing import Any, TypeAlias
from uuid import UUID

from feed.services.identity import ActorIdentity

# Any JSON-serialisable value: str, int, float, bool, None, list or dict
JSONValue: TypeAlias = Any

ACTOR_ID_KEY = "actor_id"
ACTOR_HANDLE_KEY = "actor_handle"
ACTOR_DISPLAY_NAME_KEY = "actor_display_name"


def actor_fields(actor_id: UUID, identity: ActorIdentity) -> dict[str, str]:
    """Denormalised snapshot of the actor stored alongside the event."""
    return {
        ACTOR_ID_KEY: str(actor_id),
        ACTOR_HANDLE_KEY: identity.handle,
        ACTOR_DISPLAY_NAME_KEY: identity.display_name,
    }


def merge_if_mapping(payload: JSONValue, fields: Mapping[str, JSONValue]) -> tuple[JSONValue, bool]:
    """
    Merge ``fields`` into ``payload`` when it is a mapping.

    Returns a ``(payload, merged)`` pair. Mappings come back as a new dict with
    ``fields`` applied on top; any other JSON shape is returned untouched with
    ``merged`` set to False. The caller's object is never mutated.
    """
    if isinstance(payload, Mapping):
        return {**payload, **fields}, True
    return payload, False
