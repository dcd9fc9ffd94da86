"""
auth/ownership.py -- Single-owner access decision.

authorize() is a pure function over data the caller has already loaded: it
performs no store I/O. Routes load the resource first (404 if it does not
exist), then ask authorize() before every read, update and delete.

Layer rule: no imports from api/, core/, or bookmarks/.
"""

from __future__ import annotations

from auth.models import Access, Identity


def authorize(identity: Identity, owner_id: int) -> Access:
    """Return ALLOWED only when identity owns the resource."""
    if identity.subject_id == owner_id:
        return Access.ALLOWED
    return Access.FORBIDDEN
