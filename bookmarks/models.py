"""
bookmarks/models.py -- Domain dataclass for bookmarks.

Pure data container with zero logic. The store persists it; the API layer
decides who may see it.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Bookmark:
    """A saved link belonging to exactly one account.

    owner_id is set from the creator's identity on insert and never changes.
    id is None before the record is written to the database.
    """

    owner_id: int
    title: str
    link: str
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""
