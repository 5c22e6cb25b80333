"""Registration, login checks, and account deletion."""

import asyncio
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from questlog.errors import AccountDeletionError
from questlog.logging import get_logger
from questlog.models import User, UserCreate, UserRecord
from questlog.storage import Storage

logger = get_logger("services.accounts")


def hash_password(password: str) -> str:
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


class AccountService:
    """Service for user accounts."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def register(self, data: UserCreate) -> UserRecord:
        """
        Create an account.

        :param data: Validated registration payload
        :type data: UserCreate
        :return: The stored user
        :rtype: UserRecord
        :raises UsernameTakenError: When the username is already registered
        """
        user = await self.storage.create_user(data.username, hash_password(data.password))
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, username: str, password: str) -> Optional[UserRecord]:
        user = await self.storage.get_user_by_username(username.strip())
        if user and verify_password(user.password_hash, password):
            return user
        return None

    async def delete_account(self, user: User) -> None:
        """
        Delete every journal and entity the user owns, then the user.

        Deletions run concurrently. There is no rollback: if one fails, the
        ones that already ran stay deleted.

        :param user: Account to remove
        :type user: User
        :raises AccountDeletionError: When any step fails
        """
        try:
            journals, entities = await asyncio.gather(
                self.storage.get_journals(user.id),
                self.storage.get_entities(user_id=user.id),
            )
            await asyncio.gather(
                *(self.storage.delete_journal(j.id) for j in journals),
                *(self.storage.delete_entity(e.id) for e in entities),
            )
            await self.storage.delete_user(user.id)
        except Exception as exc:
            logger.exception(f"Account deletion failed for user {user.id}")
            raise AccountDeletionError("Failed to delete account") from exc
        logger.info(
            f"Deleted user {user.id} with {len(journals)} journals and {len(entities)} entities"
        )
