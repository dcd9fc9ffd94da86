"""
auth/store.py -- SQLAlchemy Core persistence layer for accounts.

Pattern: Repository + Data Mapper (same as bookmarks/store.py).
AccountStore is the repository; _row_to_account is the mapper.
The auth service and route code never touch SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  Email uniqueness is enforced by the UNIQUE constraint on accounts.email,
  never by a read-then-write check in code. Two concurrent create() calls
  with the same email race at the database: one INSERT wins, the other gets
  IntegrityError, which create() reports as None.

DB path: bookmarks.db at the project root unless DATABASE_URL says otherwise.

Layer rule: no imports from api/, core/, or bookmarks/.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.models import Account

logger = logging.getLogger("bookmarks.auth")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
)

# Fields update_profile() may write. Everything else (id, password_hash,
# created_at) is immutable through this path.
_PROFILE_FIELDS = frozenset({"email", "first_name", "last_name"})


# ---------------------------------------------------------------------------
# SQLite connection setup
# ---------------------------------------------------------------------------


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode and a busy timeout on every new connection.

    WAL lets readers proceed during writes. The busy timeout makes a second
    concurrent writer wait for the lock instead of failing immediately, so a
    duplicate-email race ends in IntegrityError rather than "database is locked".
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")
    dbapi_conn.execute("PRAGMA busy_timeout=5000")


def make_engine(db_url: str) -> Engine:
    """Create an Engine with the SQLite settings both stores rely on."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class AccountStore:
    """Repository for Account records.

    Usage:
        store = AccountStore("sqlite:///:memory:")
        account = store.create("a@x.com", hasher.hash("secret1"))
        store.find_by_email("a@x.com")
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def create(self, email: str, password_hash: str) -> Account | None:
        """Insert a new account. Returns None if the email is already registered.

        Any other database error propagates to the caller.
        """
        now = _now_iso()
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    _accounts.insert().values(
                        email=email,
                        password_hash=password_hash,
                        created_at=now,
                        updated_at=now,
                    )
                )
                conn.commit()
        except IntegrityError:
            return None
        account_id = result.inserted_primary_key[0]
        logger.info("Account created (id=%s)", account_id)
        return Account(
            id=account_id,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def find_by_email(self, email: str) -> Account | None:
        """Look up an account by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_accounts.select().where(_accounts.c.email == email)).fetchone()
        return _row_to_account(row) if row is not None else None

    def get_by_id(self, account_id: int) -> Account | None:
        """Look up an account by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_accounts.select().where(_accounts.c.id == account_id)).fetchone()
        return _row_to_account(row) if row is not None else None

    def update_profile(self, account_id: int, **fields) -> Account | None:
        """Update profile fields (email, first_name, last_name).

        Returns the updated Account, or None if the new email belongs to
        another account. Unknown field names raise ValueError.
        Raises LookupError if account_id does not exist.
        """
        unknown = set(fields) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {unknown!r}")
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    _accounts.update().where(_accounts.c.id == account_id).values(updated_at=_now_iso(), **fields)
                )
                conn.commit()
        except IntegrityError:
            return None
        if result.rowcount == 0:
            raise LookupError(f"account {account_id} does not exist")
        return self.get_by_id(account_id)

    def ping(self) -> bool:
        """Run a trivial query. Used by the health endpoint."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_account(row) -> Account:
    return Account(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        first_name=row.first_name,
        last_name=row.last_name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
