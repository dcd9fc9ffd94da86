"""
api/routes/v1/users.py -- The authenticated account's own profile.

Routes:
  GET   /api/v1/users/me   -- profile of the token's subject
  PATCH /api/v1/users/me   -- update email / first_name / last_name

There is no route that addresses another account by id: the subject id from
the token is the only account these handlers touch.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from api.errors import http_error
from api.models import UserPatch, UserResponse
from auth.dependencies import get_current_identity
from auth.models import AuthError, Identity
from auth.store import AccountStore

router = APIRouter()


def _load_account(store: AccountStore, identity: Identity):
    # A well-signed token can outlive its account (e.g. the row was removed
    # by an operator). Treat that the same as any other bad token.
    account = store.get_by_id(identity.subject_id)
    if account is None:
        raise http_error(AuthError.UNAUTHORIZED)
    return account


@router.get("/users/me", response_model=UserResponse)
def get_me(request: Request, identity: Identity = Depends(get_current_identity)) -> UserResponse:
    """Return the authenticated account's profile."""
    store: AccountStore = request.app.state.account_store
    return UserResponse.from_account(_load_account(store, identity))


@router.patch("/users/me", response_model=UserResponse)
def update_me(
    request: Request,
    body: UserPatch,
    identity: Identity = Depends(get_current_identity),
) -> UserResponse:
    """Update profile fields of the authenticated account.

    Changing email to one that another account holds is rejected with the
    same credentials_taken error as signup. Tokens already issued keep the
    old email claim until they expire.
    """
    store: AccountStore = request.app.state.account_store
    _load_account(store, identity)

    updates = body.model_dump(exclude_unset=True)
    if "email" in updates and updates["email"] is None:
        del updates["email"]
    if not updates:
        raise HTTPException(
            status_code=400,
            detail={"code": "no_changes", "message": "No fields to update."},
        )

    updated = store.update_profile(identity.subject_id, **updates)
    if updated is None:
        raise http_error(AuthError.CREDENTIALS_TAKEN)
    return UserResponse.from_account(updated)
