"""Journal routes."""

from fastapi import APIRouter, HTTPException, Response

from questlog.dependencies import CurrentUserDep, JournalServiceDep
from questlog.errors import ForbiddenError, RecordNotFoundError
from questlog.models import Journal, JournalCreate, JournalUpdate, ResolvedMention

router = APIRouter()


@router.get("", response_model=list[Journal])
async def list_journals(user: CurrentUserDep, service: JournalServiceDep):
    return await service.list_journals(user)


@router.post("", response_model=Journal)
async def create_journal(body: JournalCreate, user: CurrentUserDep, service: JournalServiceDep):
    return await service.create_journal(user, body)


@router.get("/{journal_id}", response_model=Journal)
async def get_journal(journal_id: int, user: CurrentUserDep, service: JournalServiceDep):
    try:
        return await service.get_journal(user, journal_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc


@router.patch("/{journal_id}", response_model=Journal)
async def update_journal(
    journal_id: int,
    body: JournalUpdate,
    user: CurrentUserDep,
    service: JournalServiceDep,
):
    try:
        return await service.update_journal(user, journal_id, body)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc


@router.delete("/{journal_id}", status_code=204)
async def delete_journal(journal_id: int, user: CurrentUserDep, service: JournalServiceDep):
    try:
        await service.delete_journal(user, journal_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc
    return Response(status_code=204)


@router.get("/{journal_id}/mentions", response_model=list[ResolvedMention])
async def journal_mentions(journal_id: int, user: CurrentUserDep, service: JournalServiceDep):
    try:
        return await service.resolve_mentions(user, journal_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(403, str(exc)) from exc
