"""
api/routes/v1/bookmarks.py -- Owner-scoped bookmark CRUD.

Routes:
  GET    /bookmarks              -- list the caller's bookmarks
  POST   /bookmarks              -- create; owner is the caller
  GET    /bookmarks/{id}         -- read one
  PATCH  /bookmarks/{id}         -- edit title / link / description
  DELETE /bookmarks/{id}         -- delete

Every route requires a bearer token (router-level dependency). For the three
{id} routes the order is fixed:
  1. load the bookmark           -> 404 if it does not exist
  2. authorize(identity, owner)  -> 403 if the caller is not the owner
  3. perform the operation
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from api.errors import http_error
from api.models import BookmarkCreate, BookmarkPatch, BookmarkResponse
from auth.dependencies import get_current_identity
from auth.models import Access, AuthError, Identity
from auth.ownership import authorize
from bookmarks.models import Bookmark
from bookmarks.store import BookmarkStore

# Router-level dependency applies to every route registered on this router,
# so unauthenticated requests are rejected before any handler runs.
router = APIRouter(dependencies=[Depends(get_current_identity)])


def _owned_bookmark(store: BookmarkStore, identity: Identity, bookmark_id: int) -> Bookmark:
    bookmark = store.get(bookmark_id)
    if bookmark is None:
        raise http_error(AuthError.NOT_FOUND)
    if authorize(identity, bookmark.owner_id) is not Access.ALLOWED:
        raise http_error(AuthError.FORBIDDEN)
    return bookmark


@router.get("/bookmarks", response_model=list[BookmarkResponse])
def list_bookmarks(request: Request, identity: Identity = Depends(get_current_identity)) -> list[BookmarkResponse]:
    store: BookmarkStore = request.app.state.bookmark_store
    return [BookmarkResponse.from_bookmark(b) for b in store.list_for_owner(identity.subject_id)]


@router.post("/bookmarks", response_model=BookmarkResponse, status_code=201)
def create_bookmark(
    request: Request,
    body: BookmarkCreate,
    identity: Identity = Depends(get_current_identity),
) -> BookmarkResponse:
    """Create a bookmark owned by the caller. No ownership check is needed."""
    store: BookmarkStore = request.app.state.bookmark_store
    created = store.create(
        Bookmark(
            owner_id=identity.subject_id,
            title=body.title,
            link=body.link,
            description=body.description,
        )
    )
    return BookmarkResponse.from_bookmark(created)


@router.get("/bookmarks/{bookmark_id}", response_model=BookmarkResponse)
def get_bookmark(
    request: Request,
    bookmark_id: int,
    identity: Identity = Depends(get_current_identity),
) -> BookmarkResponse:
    store: BookmarkStore = request.app.state.bookmark_store
    return BookmarkResponse.from_bookmark(_owned_bookmark(store, identity, bookmark_id))


@router.patch("/bookmarks/{bookmark_id}", response_model=BookmarkResponse)
def edit_bookmark(
    request: Request,
    bookmark_id: int,
    body: BookmarkPatch,
    identity: Identity = Depends(get_current_identity),
) -> BookmarkResponse:
    """Apply the supplied fields. An empty body returns the bookmark unchanged."""
    store: BookmarkStore = request.app.state.bookmark_store
    bookmark = _owned_bookmark(store, identity, bookmark_id)
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        return BookmarkResponse.from_bookmark(bookmark)
    updated = store.update(bookmark_id, **updates)
    if updated is None:
        # Deleted between the ownership check and the write.
        raise http_error(AuthError.NOT_FOUND)
    return BookmarkResponse.from_bookmark(updated)


@router.delete("/bookmarks/{bookmark_id}", status_code=204)
def delete_bookmark(
    request: Request,
    bookmark_id: int,
    identity: Identity = Depends(get_current_identity),
) -> Response:
    store: BookmarkStore = request.app.state.bookmark_store
    _owned_bookmark(store, identity, bookmark_id)
    if not store.delete(bookmark_id):
        raise http_error(AuthError.NOT_FOUND)
    return Response(status_code=204)
