"""
Dependency injection for FastAPI routes.

Provides typed service dependencies and the authentication gate.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from questlog.models import UserRecord
from questlog.services import AccountService, EntityService, JournalService
from questlog.storage import Storage

SESSION_USER_KEY = "user_id"


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_journal_service(request: Request) -> JournalService:
    return request.app.state.journal_service


def get_entity_service(request: Request) -> EntityService:
    return request.app.state.entity_service


StorageDep = Annotated[Storage, Depends(get_storage)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
JournalServiceDep = Annotated[JournalService, Depends(get_journal_service)]
EntityServiceDep = Annotated[EntityService, Depends(get_entity_service)]


async def get_current_user(request: Request, storage: StorageDep) -> UserRecord:
    """
    Resolve the session cookie to a user.

    :raises HTTPException: 401 when there is no session or its user is gone
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if not isinstance(user_id, int):
        raise HTTPException(401, "Not authenticated")
    user = await storage.get_user(user_id)
    if user is None:
        request.session.clear()
        raise HTTPException(401, "Not authenticated")
    return user


CurrentUserDep = Annotated[UserRecord, Depends(get_current_user)]
