# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Database handle: owns the SQLAlchemy engine and the schema.

Constructed once in the application lifespan, injected into repositories,
disposed on shutdown.
"""
import threading
from contextlib import contextmanager, nullcontext
from typing import Iterable, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

from intake.core.logging import get_logger
from intake.schemas import (
    BOOKING_STATUSES, BUDGETS, CONTACT_PRIORITIES, CONTACT_SERVICES, CONTACT_STATUSES,
    DEMO_SERVICES, PREFERRED_TIMES, TIMELINES, USER_ROLES,
)

logger = get_logger(__name__)


def _one_of(column: str, values: Iterable[str]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"CHECK ({column} IN ({quoted}))"


# Timestamps are fixed-width ISO-8601 UTC strings so ordering is lexicographic
# on every backend.
SCHEMA = (
    f"""
    CREATE TABLE IF NOT EXISTS contacts (
        id          VARCHAR(36)  PRIMARY KEY,
        name        VARCHAR(50)  NOT NULL,
        email       VARCHAR(255) NOT NULL,
        phone       VARCHAR(50),
        company     VARCHAR(255),
        subject     VARCHAR(100),
        message     TEXT         NOT NULL,
        service     VARCHAR(50)  NOT NULL DEFAULT 'other' {_one_of("service", CONTACT_SERVICES)},
        status      VARCHAR(20)  NOT NULL DEFAULT 'new' {_one_of("status", CONTACT_STATUSES)},
        priority    VARCHAR(10)  {_one_of("priority", CONTACT_PRIORITIES)},
        notes       TEXT,
        created_at  VARCHAR(40)  NOT NULL,
        updated_at  VARCHAR(40)  NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS demos (
        id                   VARCHAR(36)  PRIMARY KEY,
        name                 VARCHAR(50)  NOT NULL,
        email                VARCHAR(255) NOT NULL,
        phone                VARCHAR(50)  NOT NULL,
        company              VARCHAR(255),
        service              VARCHAR(50)  NOT NULL {_one_of("service", DEMO_SERVICES)},
        preferred_date       VARCHAR(10)  NOT NULL,
        preferred_time       VARCHAR(10)  NOT NULL {_one_of("preferred_time", PREFERRED_TIMES)},
        project_description  TEXT         NOT NULL,
        budget               VARCHAR(20)  {_one_of("budget", BUDGETS)},
        timeline             VARCHAR(20)  {_one_of("timeline", TIMELINES)},
        status               VARCHAR(20)  NOT NULL DEFAULT 'pending' {_one_of("status", BOOKING_STATUSES)},
        notes                TEXT,
        created_at           VARCHAR(40)  NOT NULL,
        updated_at           VARCHAR(40)  NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS meetings (
        id            VARCHAR(36)  PRIMARY KEY,
        name          VARCHAR(255) NOT NULL,
        email         VARCHAR(255) NOT NULL,
        message       TEXT,
        status        VARCHAR(20)  NOT NULL DEFAULT 'pending' {_one_of("status", BOOKING_STATUSES)},
        meeting_link  VARCHAR(500),
        created_at    VARCHAR(40)  NOT NULL,
        updated_at    VARCHAR(40)  NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS users (
        id             VARCHAR(36)  PRIMARY KEY,
        name           VARCHAR(50)  NOT NULL,
        email          VARCHAR(255) NOT NULL UNIQUE,
        password_hash  VARCHAR(255) NOT NULL,
        role           VARCHAR(10)  NOT NULL DEFAULT 'user' {_one_of("role", USER_ROLES)},
        phone          VARCHAR(50),
        company        VARCHAR(255),
        created_at     VARCHAR(40)  NOT NULL,
        updated_at     VARCHAR(40)  NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_contacts_created_at ON contacts (created_at)",
    "CREATE INDEX IF NOT EXISTS ix_demos_created_at ON demos (created_at)",
    "CREATE INDEX IF NOT EXISTS ix_meetings_created_at ON meetings (created_at)",
    "CREATE INDEX IF NOT EXISTS ix_users_created_at ON users (created_at)",
)


class Database:
    def __init__(self, url: str, pool_size: int = 10, max_overflow: int = 5,
                 pool_recycle: int = 300):
        self.url = url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_recycle = pool_recycle
        self._engine: Optional[Engine] = None
        # Held around every unit of work when all threads share one connection.
        self._shared_lock: Optional[threading.Lock] = None

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.POOL_SIZE,
            max_overflow=settings.MAX_OVERFLOW,
            pool_recycle=settings.POOL_RECYCLE,
        )

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._engine

    def connect(self) -> Engine:
        """Create the engine (once) and make sure the tables exist."""
        if self._engine is None:
            self._engine = self._create_engine()
            self.init_schema()
            logger.info("Database connected dialect=%s", self._engine.dialect.name)
        return self._engine

    @contextmanager
    def begin(self) -> Iterator[Connection]:
        """A connection inside a transaction, committed on success."""
        with self._guard(), self.engine.begin() as conn:
            yield conn

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        with self._guard(), self.engine.connect() as conn:
            yield conn

    def init_schema(self) -> None:
        with self.begin() as conn:
            for statement in SCHEMA:
                conn.execute(text(statement))

    def verify_connection(self) -> None:
        with self.connection() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._shared_lock = None

    def _guard(self):
        return self._shared_lock if self._shared_lock is not None else nullcontext()

    def _create_engine(self) -> Engine:
        if self.url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every checkout sees an empty database.
                kwargs["poolclass"] = StaticPool
                self._shared_lock = threading.Lock()
            return create_engine(self.url, **kwargs)
        return create_engine(
            self.url,
            pool_pre_ping=True,
            pool_size=self._pool_size,
            max_overflow=self._max_overflow,
            pool_recycle=self._pool_recycle,
        )
