"""
bookmarks/store.py -- SQLAlchemy-backed persistence layer for bookmarks.

Uses SQLAlchemy Core (not ORM) so the dataclass in bookmarks/models.py remains
the authoritative domain representation.

Pattern: Repository + Data Mapper. BookmarkStore is the repository; the
_row_to_bookmark function is the mapper. Route handlers never touch SQL.

Ownership: owner_id is written once by create() and is not an accepted field
in update(). list_for_owner() filters in SQL so one account's listing never
contains another account's rows. get/update/delete work by id; the route
checks ownership with auth.ownership.authorize() before calling them.

owner_id is declared as a foreign key to accounts.id. SQLite only enforces it
with PRAGMA foreign_keys=ON, which make_engine() does not set: accounts are
never deleted, and the owner always comes from a validated token.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = BookmarkStore("sqlite:///:memory:")
    bookmark = store.create(Bookmark(owner_id=1, title="Docs", link="https://example.com"))
    store.list_for_owner(1)
    store.update(bookmark.id, title="Docs v2")
    store.delete(bookmark.id)
    store.close()
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.engine import Engine

from auth.store import make_engine, metadata
from bookmarks.models import Bookmark

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

# Shares the accounts MetaData so the owner_id foreign key resolves.
_bookmarks = Table(
    "bookmarks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("link", Text, nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Index("ix_bookmarks_owner_id", "owner_id"),
)

_MUTABLE_FIELDS = frozenset({"title", "description", "link"})


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BookmarkStore:
    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def create(self, bookmark: Bookmark) -> Bookmark:
        """Insert a bookmark and return it with id and timestamps filled in."""
        now = _now_iso()
        with self.engine.connect() as conn:
            result = conn.execute(
                _bookmarks.insert().values(
                    owner_id=bookmark.owner_id,
                    title=bookmark.title,
                    description=bookmark.description,
                    link=bookmark.link,
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
        return Bookmark(
            id=result.inserted_primary_key[0],
            owner_id=bookmark.owner_id,
            title=bookmark.title,
            description=bookmark.description,
            link=bookmark.link,
            created_at=now,
            updated_at=now,
        )

    def get(self, bookmark_id: int) -> Optional[Bookmark]:
        """Fetch a single bookmark by ID. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_bookmarks.select().where(_bookmarks.c.id == bookmark_id)).fetchone()
        return _row_to_bookmark(row) if row is not None else None

    def list_for_owner(self, owner_id: int) -> list[Bookmark]:
        """Return the owner's bookmarks, oldest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _bookmarks.select().where(_bookmarks.c.owner_id == owner_id).order_by(_bookmarks.c.id)
            ).fetchall()
        return [_row_to_bookmark(r) for r in rows]

    def update(self, bookmark_id: int, **fields) -> Optional[Bookmark]:
        """Update title, description and/or link.

        owner_id is not accepted: ownership is immutable after creation.
        Returns the updated Bookmark, or None if bookmark_id was not found.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown bookmark fields: {unknown!r}")
        with self.engine.connect() as conn:
            result = conn.execute(
                _bookmarks.update().where(_bookmarks.c.id == bookmark_id).values(updated_at=_now_iso(), **fields)
            )
            conn.commit()
        if result.rowcount == 0:
            return None
        return self.get(bookmark_id)

    def delete(self, bookmark_id: int) -> bool:
        """Permanently delete a bookmark. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(_bookmarks.delete().where(_bookmarks.c.id == bookmark_id))
            conn.commit()
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_bookmark(row) -> Bookmark:
    return Bookmark(
        id=row.id,
        owner_id=row.owner_id,
        title=row.title,
        description=row.description,
        link=row.link,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
