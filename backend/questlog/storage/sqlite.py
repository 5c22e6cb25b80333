"""
SQLite storage using aiosqlite.

One connection per operation, mirroring the in-memory backend's contract.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import aiosqlite

from questlog.errors import RecordNotFoundError, UsernameTakenError
from questlog.logging import get_logger
from questlog.markdown import derive_title
from questlog.models import (
    Entity,
    EntityCreate,
    EntityType,
    EntityUpdate,
    Journal,
    JournalCreate,
    JournalUpdate,
    UserRecord,
)
from questlog.storage.base import Storage, patch_fields

logger = get_logger("storage.sqlite")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# SQLite INTEGER PRIMARY KEY is a signed 64-bit rowid
MAX_ROWID = 2**63 - 1


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _in_range(record_id: int) -> bool:
    return 0 < record_id <= MAX_ROWID


def _row_to_user(row: dict) -> UserRecord:
    return UserRecord(
        id=row["id"],
        username=row["username"],
        password_hash=row["password_hash"],
        created=row["created"],
    )


def _row_to_journal(row: dict) -> Journal:
    return Journal(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        content=row["content"],
        tags=json.loads(row["tags"]),
        created=row["created"],
    )


def _row_to_entity(row: dict) -> Entity:
    return Entity(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        type=row["type"],
        description=row["description"],
        properties=json.loads(row["properties"]),
        tags=json.loads(row["tags"]),
        created=row["created"],
    )


class SqliteStorage(Storage):
    """Storage backed by a single SQLite file."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    async def _get_db(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        db.row_factory = aiosqlite.Row
        return db

    async def initialize(self) -> None:
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        db = await self._get_db()
        try:
            await db.executescript(SCHEMA_PATH.read_text())
            await db.commit()
        finally:
            await db.close()
        logger.info(f"Database initialized at {self.db_path}")

    async def _fetch_one(self, query: str, params: tuple) -> Optional[dict]:
        db = await self._get_db()
        try:
            cursor = await db.execute(query, params)
            row = await cursor.fetchone()
            return dict(row) if row else None
        finally:
            await db.close()

    async def _fetch_all(self, query: str, params: tuple = ()) -> list[dict]:
        db = await self._get_db()
        try:
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [dict(r) for r in rows]
        finally:
            await db.close()

    async def _delete(self, table: str, kind: str, record_id: int) -> None:
        if not _in_range(record_id):
            raise RecordNotFoundError(kind, record_id)
        db = await self._get_db()
        try:
            cursor = await db.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            await db.commit()
            if cursor.rowcount == 0:
                raise RecordNotFoundError(kind, record_id)
        finally:
            await db.close()

    # Users
    async def create_user(self, username: str, password_hash: str) -> UserRecord:
        created = _now()
        db = await self._get_db()
        try:
            cursor = await db.execute(
                "INSERT INTO users (username, password_hash, created) VALUES (?, ?, ?)",
                (username, password_hash, created),
            )
            await db.commit()
            user_id = cursor.lastrowid
        except aiosqlite.IntegrityError as exc:
            raise UsernameTakenError(username) from exc
        finally:
            await db.close()
        return UserRecord(id=user_id, username=username, password_hash=password_hash, created=created)

    async def get_user(self, user_id: int) -> Optional[UserRecord]:
        if not _in_range(user_id):
            return None
        row = await self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return _row_to_user(row) if row else None

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        row = await self._fetch_one("SELECT * FROM users WHERE username = ?", (username,))
        return _row_to_user(row) if row else None

    async def delete_user(self, user_id: int) -> None:
        await self._delete("users", "user", user_id)

    # Journals
    async def get_journals(self, user_id: int) -> list[Journal]:
        if not _in_range(user_id):
            return []
        rows = await self._fetch_all(
            "SELECT * FROM journals WHERE user_id = ? ORDER BY id",
            (user_id,),
        )
        return [_row_to_journal(r) for r in rows]

    async def get_journal(self, journal_id: int) -> Optional[Journal]:
        if not _in_range(journal_id):
            return None
        row = await self._fetch_one("SELECT * FROM journals WHERE id = ?", (journal_id,))
        return _row_to_journal(row) if row else None

    async def create_journal(self, user_id: int, data: JournalCreate) -> Journal:
        title = data.title if data.title is not None else derive_title(data.content)
        created = _now()
        db = await self._get_db()
        try:
            cursor = await db.execute(
                """INSERT INTO journals (user_id, title, content, tags, created)
                   VALUES (?, ?, ?, ?, ?)""",
                (user_id, title, data.content, json.dumps(data.tags), created),
            )
            await db.commit()
            journal_id = cursor.lastrowid
        finally:
            await db.close()
        return Journal(
            id=journal_id,
            user_id=user_id,
            title=title,
            content=data.content,
            tags=data.tags,
            created=created,
        )

    async def update_journal(self, journal_id: int, data: JournalUpdate) -> Journal:
        if not _in_range(journal_id):
            raise RecordNotFoundError("journal", journal_id)
        fields = patch_fields(data)
        if "tags" in fields:
            fields["tags"] = json.dumps(fields["tags"])
        db = await self._get_db()
        try:
            if fields:
                set_clause = ", ".join(f"{k} = ?" for k in fields)
                await db.execute(
                    f"UPDATE journals SET {set_clause} WHERE id = ?",
                    list(fields.values()) + [journal_id],
                )
                await db.commit()
            cursor = await db.execute("SELECT * FROM journals WHERE id = ?", (journal_id,))
            row = await cursor.fetchone()
        finally:
            await db.close()
        if not row:
            raise RecordNotFoundError("journal", journal_id)
        return _row_to_journal(dict(row))

    async def delete_journal(self, journal_id: int) -> None:
        await self._delete("journals", "journal", journal_id)

    # Entities
    async def get_entities(
        self,
        type: Optional[EntityType] = None,
        user_id: Optional[int] = None,
    ) -> list[Entity]:
        conditions = []
        params: list = []
        if type is not None:
            conditions.append("type = ?")
            params.append(EntityType(type).value)
        if user_id is not None:
            if not _in_range(user_id):
                return []
            conditions.append("user_id = ?")
            params.append(user_id)
        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
        rows = await self._fetch_all(f"SELECT * FROM entities{where} ORDER BY id", tuple(params))
        return [_row_to_entity(r) for r in rows]

    async def get_entity(self, entity_id: int) -> Optional[Entity]:
        if not _in_range(entity_id):
            return None
        row = await self._fetch_one("SELECT * FROM entities WHERE id = ?", (entity_id,))
        return _row_to_entity(row) if row else None

    async def create_entity(self, user_id: int, data: EntityCreate) -> Entity:
        created = _now()
        db = await self._get_db()
        try:
            cursor = await db.execute(
                """INSERT INTO entities (user_id, name, type, description, properties, tags, created)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    user_id,
                    data.name,
                    data.type.value,
                    data.description,
                    json.dumps(data.properties),
                    json.dumps(data.tags),
                    created,
                ),
            )
            await db.commit()
            entity_id = cursor.lastrowid
        finally:
            await db.close()
        return Entity(
            id=entity_id,
            user_id=user_id,
            name=data.name,
            type=data.type,
            description=data.description,
            properties=data.properties,
            tags=data.tags,
            created=created,
        )

    async def update_entity(self, entity_id: int, data: EntityUpdate) -> Entity:
        if not _in_range(entity_id):
            raise RecordNotFoundError("entity", entity_id)
        fields = patch_fields(data)
        if "type" in fields:
            fields["type"] = EntityType(fields["type"]).value
        for key in ("properties", "tags"):
            if key in fields:
                fields[key] = json.dumps(fields[key])
        db = await self._get_db()
        try:
            if fields:
                set_clause = ", ".join(f"{k} = ?" for k in fields)
                await db.execute(
                    f"UPDATE entities SET {set_clause} WHERE id = ?",
                    list(fields.values()) + [entity_id],
                )
                await db.commit()
            cursor = await db.execute("SELECT * FROM entities WHERE id = ?", (entity_id,))
            row = await cursor.fetchone()
        finally:
            await db.close()
        if not row:
            raise RecordNotFoundError("entity", entity_id)
        return _row_to_entity(dict(row))

    async def delete_entity(self, entity_id: int) -> None:
        await self._delete("entities", "entity", entity_id)
