"""SQLite storage backend."""
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import Any, Optional

import aiosqlite

from scitrera_app_framework import Variables

from ...models.memo import (
    Attachment, FindMemo, Memo, MemoCreate, MemoPayload, MemoRelation, RelationType, RowStatus, Visibility,
)
from .base import StorageBackend, StoragePluginBase
from .filter import compile_filter
from .in_memory import UPDATABLE_MEMO_FIELDS
from ...config import MEMOPORT_SQLITE_STORAGE_PATH, DEFAULT_MEMOPORT_SQLITE_STORAGE_PATH
from ...utils import utc_now, ensure_utc, parse_datetime_utc

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS memos
    (
        id           INTEGER PRIMARY KEY AUTOINCREMENT,
        uid          TEXT    NOT NULL UNIQUE,
        creator_id   INTEGER NOT NULL,
        row_status   TEXT    NOT NULL DEFAULT 'NORMAL',
        content      TEXT    NOT NULL DEFAULT '',
        visibility   TEXT    NOT NULL DEFAULT 'PRIVATE',
        pinned       INTEGER NOT NULL DEFAULT 0,
        payload      TEXT    NOT NULL DEFAULT '{}',
        created_at   TEXT    NOT NULL,
        updated_at   TEXT    NOT NULL,
        display_time TEXT
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_memos_creator ON memos(creator_id, row_status)",
    """
    CREATE TABLE IF NOT EXISTS attachments
    (
        id         INTEGER PRIMARY KEY AUTOINCREMENT,
        uid        TEXT    NOT NULL UNIQUE,
        memo_id    INTEGER REFERENCES memos (id) ON DELETE CASCADE,
        creator_id INTEGER,
        filename   TEXT    NOT NULL DEFAULT '',
        type       TEXT    NOT NULL DEFAULT '',
        size       INTEGER NOT NULL DEFAULT 0,
        created_at TEXT    NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_attachments_memo ON attachments(memo_id)",
    """
    CREATE TABLE IF NOT EXISTS memo_relations
    (
        memo_id         INTEGER NOT NULL REFERENCES memos (id) ON DELETE CASCADE,
        related_memo_id INTEGER NOT NULL REFERENCES memos (id) ON DELETE CASCADE,
        type            TEXT    NOT NULL DEFAULT 'REFERENCE',
        PRIMARY KEY (memo_id, related_memo_id, type)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS instance_settings
    (
        key   TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
)


def _format_ts(dt: Optional[datetime]) -> Optional[str]:
    return ensure_utc(dt).isoformat() if dt is not None else None


class SQLiteStorageBackend(StorageBackend):
    """SQLite storage backend."""

    def __init__(self, db_path: str = "memoport.db", v: Variables = None):
        """
        Initialize SQLite backend.

        Args:
            db_path: Path to SQLite database file
            v: Variables for logging context
        """
        super().__init__(v)
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Initialize storage connection."""
        # Ensure parent directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.logger.info("Connecting to SQLite database at %s", Path(self.db_path).absolute())

        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row

        # Enable WAL mode for better concurrent read performance
        await self._connection.execute("PRAGMA journal_mode=WAL")
        await self._connection.execute("PRAGMA foreign_keys = ON")

        await self._create_tables()
        self.logger.info("Connected to SQLite database at %s", self.db_path)

    async def disconnect(self) -> None:
        """Close storage connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            self.logger.info("Disconnected from SQLite database")

    async def health_check(self) -> bool:
        """Check if storage is healthy."""
        try:
            if self._connection:
                await self._connection.execute("SELECT 1")
                return True
            return False
        except Exception as e:
            self.logger.error("Health check failed: %s", e)
            return False

    async def _create_tables(self) -> None:
        for statement in _SCHEMA:
            await self._connection.execute(statement)
        await self._connection.commit()

    # ========== Memo Operations ==========

    async def create_memo(self, create: MemoCreate) -> Memo:
        """Store a new memo."""
        now = utc_now()
        try:
            cursor = await self._connection.execute(
                """
                INSERT INTO memos (uid, creator_id, row_status, content, visibility, pinned,
                                   payload, created_at, updated_at, display_time)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    create.uid,
                    create.creator_id,
                    create.row_status.value,
                    create.content,
                    create.visibility.value,
                    1 if create.pinned else 0,
                    create.payload.model_dump_json(),
                    _format_ts(create.created_at or now),
                    _format_ts(create.updated_at or now),
                    _format_ts(create.display_time),
                ),
            )
            await self._connection.commit()
        except aiosqlite.IntegrityError as e:
            await self._connection.rollback()
            raise ValueError(f"memo with UID {create.uid} already exists") from e

        memo_id = cursor.lastrowid
        self.logger.debug("Created memo %s (id=%s)", create.uid, memo_id)
        return await self.get_memo(memo_id)

    async def get_memo(self, memo_id: int) -> Optional[Memo]:
        """Get memo by internal id."""
        cursor = await self._connection.execute("SELECT * FROM memos WHERE id = ?", (memo_id,))
        row = await cursor.fetchone()
        return self._row_to_memo(row) if row else None

    async def get_memo_by_uid(self, uid: str) -> Optional[Memo]:
        """Get memo by UID, regardless of owner."""
        cursor = await self._connection.execute("SELECT * FROM memos WHERE uid = ?", (uid,))
        row = await cursor.fetchone()
        return self._row_to_memo(row) if row else None

    async def update_memo(self, memo_id: int, **updates) -> Optional[Memo]:
        """Update memo fields."""
        unknown = set(updates) - UPDATABLE_MEMO_FIELDS
        if unknown:
            raise ValueError(f"cannot update memo fields: {', '.join(sorted(unknown))}")

        if "updated_at" not in updates:
            updates["updated_at"] = utc_now()

        # Build SET clause
        set_parts = []
        values: list[Any] = []
        for key, value in updates.items():
            set_parts.append(f"{key} = ?")
            values.append(self._to_column(key, value))
        values.append(memo_id)

        cursor = await self._connection.execute(
            f"UPDATE memos SET {', '.join(set_parts)} WHERE id = ?",
            values,
        )
        await self._connection.commit()

        if cursor.rowcount == 0:
            return None
        return await self.get_memo(memo_id)

    async def delete_memo(self, memo_id: int) -> bool:
        """Delete a memo; attachments and relations cascade."""
        cursor = await self._connection.execute("DELETE FROM memos WHERE id = ?", (memo_id,))
        await self._connection.commit()
        return cursor.rowcount > 0

    async def list_memos(self, find: FindMemo) -> list[Memo]:
        """List memos matching the criteria, oldest first."""
        matches = compile_filter(find.filter)

        conditions = []
        params: list[Any] = []
        if find.creator_id is not None:
            conditions.append("creator_id = ?")
            params.append(find.creator_id)
        if find.row_status is not None:
            conditions.append("row_status = ?")
            params.append(find.row_status.value)
        if find.exclude_comments:
            conditions.append(
                "NOT EXISTS (SELECT 1 FROM memo_relations r WHERE r.memo_id = memos.id AND r.type = ?)"
            )
            params.append(RelationType.COMMENT.value)

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        cursor = await self._connection.execute(
            f"SELECT * FROM memos {where} ORDER BY created_at ASC, id ASC",
            params,
        )
        rows = await cursor.fetchall()

        memos = (self._row_to_memo(row) for row in rows)
        return [memo for memo in memos if matches(memo)]

    # ========== Attachment Operations ==========

    async def create_attachment(self, attachment: Attachment) -> Attachment:
        """Store attachment metadata."""
        cursor = await self._connection.execute(
            """
            INSERT INTO attachments (uid, memo_id, creator_id, filename, type, size, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                attachment.uid,
                attachment.memo_id,
                attachment.creator_id,
                attachment.filename,
                attachment.type,
                attachment.size,
                _format_ts(attachment.created_at),
            ),
        )
        await self._connection.commit()
        return attachment.model_copy(update={"id": cursor.lastrowid})

    async def list_attachments(self, memo_id: int) -> list[Attachment]:
        cursor = await self._connection.execute(
            "SELECT * FROM attachments WHERE memo_id = ? ORDER BY id ASC",
            (memo_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_attachment(row) for row in rows]

    # ========== Relation Operations ==========

    async def create_memo_relation(self, relation: MemoRelation) -> MemoRelation:
        await self._connection.execute(
            """
            INSERT OR IGNORE INTO memo_relations (memo_id, related_memo_id, type)
            VALUES (?, ?, ?)
            """,
            (relation.memo_id, relation.related_memo_id, relation.type.value),
        )
        await self._connection.commit()
        return relation

    async def list_memo_relations(self, memo_id: int) -> list[MemoRelation]:
        cursor = await self._connection.execute(
            "SELECT * FROM memo_relations WHERE memo_id = ?",
            (memo_id,),
        )
        rows = await cursor.fetchall()
        return [
            MemoRelation(
                memo_id=row["memo_id"],
                related_memo_id=row["related_memo_id"],
                type=RelationType(row["type"]),
            )
            for row in rows
        ]

    # ========== Instance Settings ==========

    async def get_instance_setting(self, key: str) -> Optional[str]:
        cursor = await self._connection.execute(
            "SELECT value FROM instance_settings WHERE key = ?",
            (key,),
        )
        row = await cursor.fetchone()
        return row["value"] if row else None

    async def set_instance_setting(self, key: str, value: str) -> None:
        await self._connection.execute(
            """
            INSERT INTO instance_settings (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            (key, value),
        )
        await self._connection.commit()

    # ========== Row Conversion ==========

    @staticmethod
    def _to_column(key: str, value: Any) -> Any:
        if key == "payload":
            if isinstance(value, MemoPayload):
                return value.model_dump_json()
            return MemoPayload.model_validate(value).model_dump_json()
        if key in ("visibility", "row_status"):
            return value.value if hasattr(value, "value") else str(value)
        if key == "pinned":
            return 1 if value else 0
        if key in ("created_at", "updated_at", "display_time"):
            return _format_ts(value)
        return value

    def _row_to_memo(self, row: aiosqlite.Row) -> Memo:
        """Convert database row to Memo domain model."""
        return Memo(
            id=row["id"],
            uid=row["uid"],
            creator_id=row["creator_id"],
            row_status=RowStatus(row["row_status"]),
            content=row["content"],
            visibility=Visibility(row["visibility"]),
            pinned=bool(row["pinned"]),
            payload=MemoPayload.model_validate_json(row["payload"]) if row["payload"] else MemoPayload(),
            created_at=parse_datetime_utc(row["created_at"]),
            updated_at=parse_datetime_utc(row["updated_at"]),
            display_time=parse_datetime_utc(row["display_time"]),
        )

    def _row_to_attachment(self, row: aiosqlite.Row) -> Attachment:
        """Convert database row to Attachment domain model."""
        return Attachment(
            id=row["id"],
            uid=row["uid"],
            memo_id=row["memo_id"],
            creator_id=row["creator_id"],
            filename=row["filename"],
            type=row["type"],
            size=row["size"],
            created_at=parse_datetime_utc(row["created_at"]),
        )


class SqliteStorageBackendPlugin(StoragePluginBase):
    PROVIDER_NAME = 'sqlite'

    def initialize(self, v: Variables, logger: Logger) -> object | None:
        return SQLiteStorageBackend(
            db_path=v.environ(MEMOPORT_SQLITE_STORAGE_PATH, default=DEFAULT_MEMOPORT_SQLITE_STORAGE_PATH),
            v=v
        )
