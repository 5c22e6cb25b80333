"""In-process storage backed by dicts and id counters."""

from copy import deepcopy
from datetime import datetime, timezone
from itertools import count
from typing import Optional

from questlog.errors import RecordNotFoundError, UsernameTakenError
from questlog.markdown import derive_title
from questlog.models import (
    Entity,
    EntityCreate,
    EntityType,
    EntityUpdate,
    Journal,
    JournalCreate,
    JournalUpdate,
    UserRecord,
)
from questlog.storage.base import Storage, patch_fields


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):
    """
    Keeps every record in process memory.

    No method awaits between reading and writing the maps, so each call is
    atomic on the event loop. Concurrent updates to one id are last write wins.
    Records are copied on the way in and out; callers never hold the stored
    instance.
    """

    def __init__(self):
        self._users: dict[int, UserRecord] = {}
        self._journals: dict[int, Journal] = {}
        self._entities: dict[int, Entity] = {}
        self._user_ids = count(1)
        self._journal_ids = count(1)
        self._entity_ids = count(1)

    # Users
    async def create_user(self, username: str, password_hash: str) -> UserRecord:
        if any(u.username == username for u in self._users.values()):
            raise UsernameTakenError(username)
        user = UserRecord(
            id=next(self._user_ids),
            username=username,
            password_hash=password_hash,
            created=_now(),
        )
        self._users[user.id] = user
        return user.model_copy()

    async def get_user(self, user_id: int) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    async def delete_user(self, user_id: int) -> None:
        if self._users.pop(user_id, None) is None:
            raise RecordNotFoundError("user", user_id)

    # Journals
    async def get_journals(self, user_id: int) -> list[Journal]:
        return [j.model_copy(deep=True) for j in self._journals.values() if j.user_id == user_id]

    async def get_journal(self, journal_id: int) -> Optional[Journal]:
        journal = self._journals.get(journal_id)
        return journal.model_copy(deep=True) if journal else None

    async def create_journal(self, user_id: int, data: JournalCreate) -> Journal:
        journal = Journal(
            id=next(self._journal_ids),
            user_id=user_id,
            title=data.title if data.title is not None else derive_title(data.content),
            content=data.content,
            tags=list(data.tags),
            created=_now(),
        )
        self._journals[journal.id] = journal
        return journal.model_copy(deep=True)

    async def update_journal(self, journal_id: int, data: JournalUpdate) -> Journal:
        existing = self._journals.get(journal_id)
        if existing is None:
            raise RecordNotFoundError("journal", journal_id)
        updated = existing.model_copy(update=patch_fields(data), deep=True)
        self._journals[journal_id] = updated
        return updated.model_copy(deep=True)

    async def delete_journal(self, journal_id: int) -> None:
        if self._journals.pop(journal_id, None) is None:
            raise RecordNotFoundError("journal", journal_id)

    # Entities
    async def get_entities(
        self,
        type: Optional[EntityType] = None,
        user_id: Optional[int] = None,
    ) -> list[Entity]:
        return [
            e.model_copy(deep=True)
            for e in self._entities.values()
            if (type is None or e.type == type)
            and (user_id is None or e.user_id == user_id)
        ]

    async def get_entity(self, entity_id: int) -> Optional[Entity]:
        entity = self._entities.get(entity_id)
        return entity.model_copy(deep=True) if entity else None

    async def create_entity(self, user_id: int, data: EntityCreate) -> Entity:
        entity = Entity(
            id=next(self._entity_ids),
            user_id=user_id,
            name=data.name,
            type=data.type,
            description=data.description,
            properties=deepcopy(data.properties),
            tags=list(data.tags),
            created=_now(),
        )
        self._entities[entity.id] = entity
        return entity.model_copy(deep=True)

    async def update_entity(self, entity_id: int, data: EntityUpdate) -> Entity:
        existing = self._entities.get(entity_id)
        if existing is None:
            raise RecordNotFoundError("entity", entity_id)
        updated = existing.model_copy(update=patch_fields(data), deep=True)
        self._entities[entity_id] = updated
        return updated.model_copy(deep=True)

    async def delete_entity(self, entity_id: int) -> None:
        if self._entities.pop(entity_id, None) is None:
            raise RecordNotFoundError("entity", entity_id)
