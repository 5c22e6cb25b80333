"""Entity routes."""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from questlog.dependencies import CurrentUserDep, EntityServiceDep
from questlog.errors import ForbiddenError, RecordNotFoundError
from questlog.models import (
    ENTITY_TEMPLATES,
    Entity,
    EntityCreate,
    EntityType,
    EntityUpdate,
    ResolvedReference,
)

router = APIRouter()


@router.get("", response_model=list[Entity])
async def list_entities(
    user: CurrentUserDep,
    service: EntityServiceDep,
    type: Optional[EntityType] = Query(None),
):
    return await service.list_entities(user, type=type)


@router.post("", response_model=Entity)
async def create_entity(body: EntityCreate, user: CurrentUserDep, service: EntityServiceDep):
    return await service.create_entity(user, body)


@router.get("/templates", response_model=dict[EntityType, dict[str, Any]])
async def entity_templates():
    return ENTITY_TEMPLATES


@router.get("/{entity_id}", response_model=Entity)
async def get_entity(entity_id: int, user: CurrentUserDep, service: EntityServiceDep):
    try:
        return await service.get_entity(user, entity_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc


@router.patch("/{entity_id}", response_model=Entity)
async def update_entity(
    entity_id: int,
    body: EntityUpdate,
    user: CurrentUserDep,
    service: EntityServiceDep,
):
    try:
        return await service.update_entity(user, entity_id, body)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc


@router.delete("/{entity_id}", status_code=204)
async def delete_entity(entity_id: int, user: CurrentUserDep, service: EntityServiceDep):
    try:
        await service.delete_entity(user, entity_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc
    return Response(status_code=204)


@router.get("/{entity_id}/references", response_model=list[ResolvedReference])
async def entity_reference_targets(entity_id: int, user: CurrentUserDep, service: EntityServiceDep):
    try:
        return await service.resolve_references(user, entity_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc
