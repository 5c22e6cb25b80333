"""Entity domain model."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from questlog.models.domain.journal import Mention
from questlog.models.enums import EntityType


class EntityCreate(BaseModel):
    """Payload for creating an entity."""
    name: str
    type: EntityType
    description: str = ""
    properties: dict[str, Any]
    tags: list[str] = Field(default_factory=list)


class EntityUpdate(BaseModel):
    """Payload for patching an entity. All fields optional; only provided fields are patched."""
    name: Optional[str] = None
    type: Optional[EntityType] = None
    description: Optional[str] = None
    properties: Optional[dict[str, Any]] = None
    tags: Optional[list[str]] = None


class Entity(BaseModel):
    """An NPC, creature, location, or organization owned by one user."""
    id: int
    user_id: int
    name: str
    type: EntityType
    description: str = ""
    properties: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EntityReference(BaseModel):
    """A soft pointer from one entity's properties to another entity."""
    field: str
    entity_id: int
    expected_type: EntityType


class ResolvedReference(EntityReference):
    entity: Optional[Entity] = None


class ResolvedMention(Mention):
    entity: Optional[Entity] = None
