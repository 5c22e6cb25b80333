"""Storage interface shared by every backing."""

from abc import ABC, abstractmethod
from typing import Optional

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


class Storage(ABC):
    """
    Sole owner of users, journals, and entities.

    Lookups return None for unknown ids. Update and delete raise
    RecordNotFoundError instead and never create a record.
    create_user raises UsernameTakenError on a duplicate name.
    """

    async def initialize(self) -> None:
        """Prepare the backing. Safe to call more than once."""

    # Users
    @abstractmethod
    async def create_user(self, username: str, password_hash: str) -> UserRecord: ...

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def delete_user(self, user_id: int) -> None: ...

    # Journals
    @abstractmethod
    async def get_journals(self, user_id: int) -> list[Journal]: ...

    @abstractmethod
    async def get_journal(self, journal_id: int) -> Optional[Journal]: ...

    @abstractmethod
    async def create_journal(self, user_id: int, data: JournalCreate) -> Journal: ...

    @abstractmethod
    async def update_journal(self, journal_id: int, data: JournalUpdate) -> Journal: ...

    @abstractmethod
    async def delete_journal(self, journal_id: int) -> None: ...

    # Entities
    @abstractmethod
    async def get_entities(
        self,
        type: Optional[EntityType] = None,
        user_id: Optional[int] = None,
    ) -> list[Entity]: ...

    @abstractmethod
    async def get_entity(self, entity_id: int) -> Optional[Entity]: ...

    @abstractmethod
    async def create_entity(self, user_id: int, data: EntityCreate) -> Entity: ...

    @abstractmethod
    async def update_entity(self, entity_id: int, data: EntityUpdate) -> Entity: ...

    @abstractmethod
    async def delete_entity(self, entity_id: int) -> None: ...


def patch_fields(data: JournalUpdate | EntityUpdate) -> dict:
    """Fields the client actually supplied; explicit nulls count as absent."""
    return data.model_dump(exclude_unset=True, exclude_none=True)
