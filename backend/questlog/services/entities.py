"""Entity operations under the ownership gate, plus soft-reference resolution."""

import asyncio
from typing import Optional

from questlog.errors import ForbiddenError, RecordNotFoundError
from questlog.logging import get_logger
from questlog.models import (
    Entity,
    EntityCreate,
    EntityType,
    EntityUpdate,
    ResolvedReference,
    User,
    apply_template,
    entity_references,
)
from questlog.storage import Storage

logger = get_logger("services.entities")


async def lookup_owned_entity(
    storage: Storage,
    user: User,
    entity_id: int,
    expected_type: EntityType,
) -> Optional[Entity]:
    """
    Follow a soft reference.

    Returns None when the target is gone, belongs to someone else, or is
    not of the expected type. Never raises for a dangling reference.
    """
    entity = await storage.get_entity(entity_id)
    if entity is None or entity.user_id != user.id or entity.type != expected_type:
        return None
    return entity


class EntityService:
    """Business logic for campaign entities."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def _get_owned(self, user: User, entity_id: int) -> Entity:
        entity = await self.storage.get_entity(entity_id)
        if entity is None:
            raise RecordNotFoundError("entity", entity_id)
        if entity.user_id != user.id:
            logger.warning(f"User {user.id} denied access to entity {entity_id}")
            raise ForbiddenError("entity", entity_id)
        return entity

    async def list_entities(self, user: User, type: EntityType | None = None) -> list[Entity]:
        return await self.storage.get_entities(type=type, user_id=user.id)

    async def get_entity(self, user: User, entity_id: int) -> Entity:
        return await self._get_owned(user, entity_id)

    async def create_entity(self, user: User, data: EntityCreate) -> Entity:
        data = data.model_copy(update={"properties": apply_template(data.type, data.properties)})
        entity = await self.storage.create_entity(user.id, data)
        logger.info(f"Created {entity.type.value} {entity.id} for user {user.id}")
        return entity

    async def update_entity(self, user: User, entity_id: int, data: EntityUpdate) -> Entity:
        existing = await self._get_owned(user, entity_id)
        if data.type is not None or data.properties is not None:
            entity_type = data.type if data.type is not None else existing.type
            properties = data.properties if data.properties is not None else existing.properties
            data = data.model_copy(update={"properties": apply_template(entity_type, properties)})
        return await self.storage.update_entity(entity_id, data)

    async def delete_entity(self, user: User, entity_id: int) -> None:
        await self._get_owned(user, entity_id)
        await self.storage.delete_entity(entity_id)
        logger.info(f"Deleted entity {entity_id} for user {user.id}")

    async def resolve_references(self, user: User, entity_id: int) -> list[ResolvedReference]:
        """
        Resolve headquarters, active organizations, and NPC membership.

        :param user: Caller; only their entities resolve
        :type user: User
        :param entity_id: Entity whose properties to follow
        :type entity_id: int
        :return: One entry per reference, with `entity` None when dangling
        :rtype: list[ResolvedReference]
        """
        entity = await self._get_owned(user, entity_id)
        references = entity_references(entity)
        targets = await asyncio.gather(*(
            lookup_owned_entity(self.storage, user, ref.entity_id, ref.expected_type)
            for ref in references
        ))
        return [
            ResolvedReference(**ref.model_dump(), entity=target)
            for ref, target in zip(references, targets)
        ]
