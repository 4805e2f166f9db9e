# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Shared data-access layer for the submission tables.

Subclasses only declare their table and column sets; every statement is
built from those whitelists so caller-supplied keys never reach the SQL text.
NO business rules here, pure CRUD.
"""
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from intake.core.database import Database
from intake.core.errors import ConflictError, PersistenceError
from intake.core.logging import get_logger

logger = get_logger(__name__)


class MonotonicClock:
    """UTC timestamps that never repeat within the process, so creation order is total."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: Optional[datetime] = None

    def __call__(self) -> str:
        with self._lock:
            now = datetime.now(timezone.utc)
            if self._last is not None and now <= self._last:
                now = self._last + timedelta(microseconds=1)
            self._last = now
        return now.isoformat(timespec="microseconds")


utc_clock = MonotonicClock()


def _iso(value: Any) -> Any:
    return value.isoformat(timespec="microseconds") if isinstance(value, datetime) else value


class SubmissionRepository:
    TABLE: str = ""
    ENTITY: str = "record"
    COLUMNS: Tuple[str, ...] = ()
    WRITABLE: Tuple[str, ...] = ()
    UPDATABLE: Tuple[str, ...] = ()
    FILTERS: Tuple[str, ...] = ()
    # Set when the table has a UNIQUE column a caller can collide on.
    CONFLICT_MESSAGE: Optional[str] = None

    def __init__(self, database: Database, clock: Callable[[], str] = utc_clock):
        self._db = database
        self._clock = clock

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record; omitted (``None``) columns fall back to table defaults."""
        now = self._clock()
        row = {k: v for k, v in record.items() if k in self.WRITABLE and v is not None}
        row.update(id=str(uuid.uuid4()), created_at=now, updated_at=now)
        columns = ", ".join(row)
        values = ", ".join(f":{c}" for c in row)
        try:
            with self._db.begin() as conn:
                conn.execute(text(f"INSERT INTO {self.TABLE} ({columns}) VALUES ({values})"), row)
                created = self._select_one(conn, row["id"])
        except SQLAlchemyError as exc:
            self._raise_conflict(exc)
            logger.error("Failed to create %s: %s", self.ENTITY, exc)
            raise PersistenceError(f"Could not store {self.ENTITY}") from exc
        return created

    def update(self, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge only the supplied, non-empty fields. ``None`` if the id is unknown."""
        params = {k: v for k, v in fields.items() if k in self.UPDATABLE and v is not None}
        params["updated_at"] = self._clock()
        assignments = ", ".join(f"{c} = :{c}" for c in params)
        params["id"] = record_id
        try:
            with self._db.begin() as conn:
                result = conn.execute(
                    text(f"UPDATE {self.TABLE} SET {assignments} WHERE id = :id"), params,
                )
                if result.rowcount == 0:
                    return None
                return self._select_one(conn, record_id)
        except SQLAlchemyError as exc:
            self._raise_conflict(exc)
            logger.error("Failed to update %s id=%s: %s", self.ENTITY, record_id, exc)
            raise PersistenceError(f"Could not update {self.ENTITY}") from exc

    def delete(self, record_id: str) -> bool:
        try:
            with self._db.begin() as conn:
                result = conn.execute(
                    text(f"DELETE FROM {self.TABLE} WHERE id = :id"), {"id": record_id},
                )
        except SQLAlchemyError as exc:
            logger.error("Failed to delete %s id=%s: %s", self.ENTITY, record_id, exc)
            raise PersistenceError(f"Could not delete {self.ENTITY}") from exc
        return result.rowcount > 0

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        with self._db.connection() as conn:
            return self._select_one(conn, record_id)

    def list(self, page: int = 1, limit: int = 10,
             **filters: Optional[str]) -> Tuple[int, List[Dict[str, Any]]]:
        """Newest first, offset paginated. Returns ``(total matching, page rows)``."""
        where, params = self._where(filters)
        with self._db.connection() as conn:
            total = conn.execute(
                text(f"SELECT COUNT(*) FROM {self.TABLE}{where}"), params,
            ).scalar() or 0
            params["limit"] = limit
            params["offset"] = (page - 1) * limit
            rows = conn.execute(
                text(
                    f"SELECT {self._columns()} FROM {self.TABLE}{where} "
                    "ORDER BY created_at DESC, id DESC LIMIT :limit OFFSET :offset"
                ),
                params,
            ).mappings().all()
        return total, [self._row_to_dict(r) for r in rows]

    def count(self, **filters: Optional[str]) -> int:
        where, params = self._where(filters)
        with self._db.connection() as conn:
            return conn.execute(
                text(f"SELECT COUNT(*) FROM {self.TABLE}{where}"), params,
            ).scalar() or 0

    def status_by_service(self) -> List[Dict[str, str]]:
        """Every ``(service, status)`` pair in the table, oldest first."""
        with self._db.connection() as conn:
            rows = conn.execute(
                text(f"SELECT service, status FROM {self.TABLE} ORDER BY created_at, id"),
            ).fetchall()
        return [{"service": r[0], "status": r[1]} for r in rows]

    # ── Private ────────────────────────────────────────────────────────

    def _raise_conflict(self, exc: SQLAlchemyError) -> None:
        if (self.CONFLICT_MESSAGE and isinstance(exc, IntegrityError)
                and "unique" in str(exc.orig).lower()):
            raise ConflictError(self.CONFLICT_MESSAGE) from exc

    def _columns(self) -> str:
        return ", ".join(self.COLUMNS)

    def _where(self, filters: Dict[str, Optional[str]]) -> Tuple[str, Dict[str, Any]]:
        conditions: List[str] = []
        params: Dict[str, Any] = {}
        for name, value in filters.items():
            if name not in self.FILTERS:
                raise ValueError(f"Cannot filter {self.TABLE} by {name!r}")
            if value:
                conditions.append(f"{name} = :{name}")
                params[name] = value
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        return where, params

    def _select_one(self, conn, record_id: str) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            text(f"SELECT {self._columns()} FROM {self.TABLE} WHERE id = :id"),
            {"id": record_id},
        ).mappings().first()
        return self._row_to_dict(row) if row else None

    def _row_to_dict(self, row) -> Dict[str, Any]:
        return {column: _iso(row[column]) for column in self.COLUMNS}
