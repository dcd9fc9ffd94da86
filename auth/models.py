"""
auth/models.py -- Domain dataclasses and result kinds for authentication.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in bookmarks/models.py -- dataclasses own domain shape; stores and the auth
service do the work.

Result kinds: the core reports failures as values (AuthError, TokenError,
Access) rather than raising. The API layer owns the mapping to HTTP status
codes (see api/errors.py).

Layer rule: no imports from api/, core/, or bookmarks/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class Account:
    """A registered account holder.

    email is unique and case-sensitive as stored. password_hash is the Argon2
    encoded digest (algorithm, cost parameters, salt and hash in one string).
    It never leaves the auth package: API responses are built from explicit
    field lists, not from this dataclass.
    """

    email: str
    password_hash: str
    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def __repr__(self) -> str:
        # Keep the digest out of logs and tracebacks.
        return f"Account(id={self.id!r}, email={self.email!r})"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller for the duration of one request."""

    subject_id: int
    email: str


class AuthError(str, Enum):
    """User-visible failure kinds. Values double as API error codes."""

    VALIDATION = "validation_error"
    CREDENTIALS_MISMATCH = "credentials_mismatch"
    CREDENTIALS_TAKEN = "credentials_taken"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class TokenError(str, Enum):
    INVALID = "invalid"
    EXPIRED = "expired"


class Access(str, Enum):
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AuthOutcome:
    """Result of signup/signin: exactly one of token or error is set."""

    token: str | None = None
    error: AuthError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
