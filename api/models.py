"""
API request and response models for the bookmark service REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
bookmarks/models.py, which own the internal domain representation. Route
handlers map between the two.

Response models are built from explicit field lists. Account.password_hash has
no counterpart here, so it cannot leak into a response body.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from auth.models import Account
from bookmarks.models import Bookmark

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Deliberately loose: one "@", something on each side, a dot in the domain.
# Deliverability is not our problem; shape is.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

_Name = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


# ---------------------------------------------------------------------------
# Shared envelopes
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class AuthRequest(BaseModel):
    """Request body for POST /auth/signup and POST /auth/signin.

    Email is not stripped or lower-cased: accounts are keyed by the email
    exactly as submitted.
    """

    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=255)


class TokenResponse(BaseModel):
    """Successful signup/signin body."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str = "bearer"
    expires_in: int


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Profile of the authenticated account. Never includes the password hash."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_account(cls, account: Account) -> "UserResponse":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            created_at=account.created_at or "",
            updated_at=account.updated_at or "",
        )


class UserPatch(BaseModel):
    """Request body for PATCH /users/me. Omitted fields are left unchanged.

    Email follows the AuthRequest rules and is stored exactly as sent, so the
    new address works for signin unchanged. Names are stripped.
    """

    email: Optional[str] = Field(default=None, min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    first_name: Optional[_Name] = None
    last_name: Optional[_Name] = None


# ---------------------------------------------------------------------------
# Bookmarks
# ---------------------------------------------------------------------------


class BookmarkCreate(BaseModel):
    """Request body for POST /bookmarks. The owner comes from the token, never the body."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    link: str = Field(min_length=1, max_length=2048)
    description: Optional[str] = Field(default=None, max_length=2000)


class BookmarkPatch(BaseModel):
    """Request body for PATCH /bookmarks/{id}. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    link: Optional[str] = Field(default=None, min_length=1, max_length=2048)
    description: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "BookmarkPatch":
        """title and link may be omitted but not explicitly set to null."""
        for name in ("title", "link"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class BookmarkResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    owner_id: int
    title: str
    link: str
    description: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkResponse":
        """Factory Method -- the domain-to-transport mapping lives with the model."""
        return cls(
            id=bookmark.id,
            owner_id=bookmark.owner_id,
            title=bookmark.title,
            link=bookmark.link,
            description=bookmark.description,
            created_at=bookmark.created_at,
            updated_at=bookmark.updated_at,
        )
