"""Domain exceptions raised by storage and services.

Routers translate these into HTTP responses at the call site.
"""


class RecordNotFoundError(LookupError):
    """A journal, entity, or user id does not exist."""

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind.capitalize()} not found")
        self.kind = kind
        self.record_id = record_id


class ForbiddenError(PermissionError):
    """The record exists but belongs to another user."""

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"You do not have access to this {kind}")
        self.kind = kind
        self.record_id = record_id


class UsernameTakenError(ValueError):
    def __init__(self, username: str):
        super().__init__("That username is already taken")
        self.username = username


class AccountDeletionError(RuntimeError):
    """Account cascade failed part way; some records may already be gone."""
