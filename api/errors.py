"""
api/errors.py -- Mapping from core result kinds to HTTP errors.

The auth core reports failures as AuthError values. This module is the one
place that decides which status code and message each kind gets, so routes
stay free of status-code literals for auth outcomes.

Compatibility note: CREDENTIALS_TAKEN and CREDENTIALS_MISMATCH are 403, as
the service has always answered them, rather than 409/401.
"""

from __future__ import annotations

from fastapi import HTTPException

from auth.models import AuthError

_STATUS: dict[AuthError, tuple[int, str]] = {
    AuthError.VALIDATION: (400, "Request validation failed."),
    AuthError.CREDENTIALS_MISMATCH: (403, "Credentials do not match."),
    AuthError.CREDENTIALS_TAKEN: (403, "Credentials taken."),
    AuthError.UNAUTHORIZED: (401, "Authentication required."),
    AuthError.FORBIDDEN: (403, "Access to resource denied."),
    AuthError.NOT_FOUND: (404, "Resource not found."),
}


def status_for(kind: AuthError) -> tuple[int, str]:
    """Return the (status code, message) pair for an AuthError."""
    return _STATUS[kind]


def http_error(kind: AuthError) -> HTTPException:
    """Build the HTTPException for an AuthError. Callers raise it."""
    status_code, message = _STATUS[kind]
    headers = {"WWW-Authenticate": "Bearer"} if kind is AuthError.UNAUTHORIZED else None
    return HTTPException(
        status_code=status_code,
        detail={"code": kind.value, "message": message, "detail": None},
        headers=headers,
    )
