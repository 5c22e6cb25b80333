"""Domain models: accounts, journals, and campaign entities."""

from questlog.models.domain.user import User, UserCreate, UserLogin, UserRecord, check_password_policy
from questlog.models.domain.journal import Journal, JournalCreate, JournalUpdate, Mention
from questlog.models.domain.entity import (
    Entity,
    EntityCreate,
    EntityUpdate,
    EntityReference,
    ResolvedReference,
    ResolvedMention,
)

__all__ = [
    "User", "UserCreate", "UserLogin", "UserRecord", "check_password_policy",
    "Journal", "JournalCreate", "JournalUpdate", "Mention",
    "Entity", "EntityCreate", "EntityUpdate",
    "EntityReference", "ResolvedReference", "ResolvedMention",
]
