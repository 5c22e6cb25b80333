"""Journal operations under the ownership gate."""

import asyncio

from questlog.errors import ForbiddenError, RecordNotFoundError
from questlog.logging import get_logger
from questlog.markdown import derive_title, extract_mentions
from questlog.models import (
    Journal,
    JournalCreate,
    JournalUpdate,
    ResolvedMention,
    User,
)
from questlog.services.entities import lookup_owned_entity
from questlog.storage import Storage

logger = get_logger("services.journals")


def _blank(value: str | None) -> bool:
    return value is not None and not value.strip()


class JournalService:
    """Business logic for journal entries."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def _get_owned(self, user: User, journal_id: int) -> Journal:
        journal = await self.storage.get_journal(journal_id)
        if journal is None:
            raise RecordNotFoundError("journal", journal_id)
        if journal.user_id != user.id:
            logger.warning(f"User {user.id} denied access to journal {journal_id}")
            raise ForbiddenError("journal", journal_id)
        return journal

    async def list_journals(self, user: User) -> list[Journal]:
        return await self.storage.get_journals(user.id)

    async def get_journal(self, user: User, journal_id: int) -> Journal:
        return await self._get_owned(user, journal_id)

    async def create_journal(self, user: User, data: JournalCreate) -> Journal:
        if data.title is None or _blank(data.title):
            data = data.model_copy(update={"title": derive_title(data.content)})
        journal = await self.storage.create_journal(user.id, data)
        logger.info(f"Created journal {journal.id} for user {user.id}")
        return journal

    async def update_journal(self, user: User, journal_id: int, data: JournalUpdate) -> Journal:
        existing = await self._get_owned(user, journal_id)
        # New content without a title re-titles the entry; a blank title does too.
        if _blank(data.title):
            content = data.content if data.content is not None else existing.content
            data = data.model_copy(update={"title": derive_title(content)})
        elif data.title is None and data.content is not None:
            data = data.model_copy(update={"title": derive_title(data.content)})
        return await self.storage.update_journal(journal_id, data)

    async def delete_journal(self, user: User, journal_id: int) -> None:
        await self._get_owned(user, journal_id)
        await self.storage.delete_journal(journal_id)
        logger.info(f"Deleted journal {journal_id} for user {user.id}")

    async def resolve_mentions(self, user: User, journal_id: int) -> list[ResolvedMention]:
        """
        Resolve every entity link in a journal's content.

        Links to entities that no longer exist, belong to another user, or
        have a different type resolve to `entity=None`.
        """
        journal = await self._get_owned(user, journal_id)
        mentions = extract_mentions(journal.content)
        targets = await asyncio.gather(*(
            lookup_owned_entity(self.storage, user, m.entity_id, m.type)
            for m in mentions
        ))
        return [
            ResolvedMention(**m.model_dump(), entity=target)
            for m, target in zip(mentions, targets)
        ]
