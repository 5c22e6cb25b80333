"""Authentication and account routes."""

from fastapi import APIRouter, HTTPException, Request

from questlog.dependencies import SESSION_USER_KEY, AccountServiceDep, CurrentUserDep
from questlog.errors import AccountDeletionError, UsernameTakenError
from questlog.models import User, UserCreate, UserLogin

router = APIRouter()


@router.post("/register", response_model=User)
async def register(request: Request, body: UserCreate, service: AccountServiceDep):
    try:
        user = await service.register(body)
    except UsernameTakenError as exc:
        raise HTTPException(409, str(exc)) from exc
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    return user.public()


@router.post("/login", response_model=User)
async def login(request: Request, body: UserLogin, service: AccountServiceDep):
    user = await service.authenticate(body.username, body.password)
    if not user:
        raise HTTPException(401, "Invalid username or password")
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    return user.public()


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"status": "logged_out"}


@router.get("/user", response_model=User)
async def current_user(user: CurrentUserDep):
    return user.public()


@router.delete("/user")
async def delete_account(request: Request, user: CurrentUserDep, service: AccountServiceDep):
    try:
        await service.delete_account(user)
    except AccountDeletionError as exc:
        raise HTTPException(500, str(exc)) from exc
    request.session.clear()
    return {"status": "deleted", "id": user.id}
