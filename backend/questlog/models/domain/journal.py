"""Journal domain model."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from questlog.models.enums import EntityType


class JournalCreate(BaseModel):
    """Payload for creating a journal entry. Title is derived from content when omitted."""
    title: Optional[str] = None
    content: str
    tags: list[str] = Field(default_factory=list)


class JournalUpdate(BaseModel):
    """Payload for patching a journal entry. Only provided fields are changed."""
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[list[str]] = None


class Journal(BaseModel):
    """A free-form markdown campaign note."""
    id: int
    user_id: int
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Mention(BaseModel):
    """An `@[Name](entity/{type}/{id})` link found in journal content."""
    name: str
    type: EntityType
    entity_id: int
