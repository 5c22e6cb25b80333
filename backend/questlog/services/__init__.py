"""Services: ownership-checked operations on top of storage."""

from questlog.services.accounts import AccountService
from questlog.services.entities import EntityService
from questlog.services.journals import JournalService

__all__ = ["AccountService", "EntityService", "JournalService"]
