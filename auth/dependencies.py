"""
auth/dependencies.py -- Bearer-token identity resolution for FastAPI routes.

IdentityResolver is the framework-free part: it takes the raw Authorization
header value and returns an Identity or None. It does not say why it failed.
Missing header, wrong scheme, malformed token, bad signature and expired token
all collapse to None so the response cannot be used to probe tokens.

get_current_identity() is the dispatch-layer check. Routes declare it with
Depends(); it calls the resolver held on app.state, stores the Identity on
request.state for the rest of that request, and raises the single 401.

Layer rule: no imports from web/, core/, or bookmarks/.
  auth/dependencies.py may import from fastapi (for HTTPException/Request)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from auth.models import AuthError, Identity, TokenError
from auth.tokens import TokenIssuer

logger = logging.getLogger("bookmarks.auth")

_SCHEME = "Bearer"

UNAUTHORIZED_DETAIL = {
    "code": AuthError.UNAUTHORIZED.value,
    "message": "Authentication required.",
    "detail": None,
}


class IdentityResolver:
    """Turn an Authorization header into an Identity.

    Only the exact form "Bearer <token>" is accepted: one space, case-sensitive
    scheme, non-empty token without embedded whitespace.
    """

    def __init__(self, issuer: TokenIssuer) -> None:
        self._issuer = issuer

    def resolve(self, raw_header: str | None) -> Identity | None:
        token = _extract_bearer(raw_header)
        if token is None:
            return None
        result = self._issuer.validate(token)
        if isinstance(result, TokenError):
            logger.debug("Rejected bearer token (%s)", result.value)
            return None
        return result


def _extract_bearer(raw_header: str | None) -> str | None:
    if not raw_header:
        return None
    parts = raw_header.split(" ")
    if len(parts) != 2 or parts[0] != _SCHEME:
        return None
    token = parts[1]
    if not token or any(c.isspace() for c in token):
        return None
    return token


def get_current_identity(request: Request) -> Identity:
    """Require a valid bearer token. Raises HTTP 401 otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(identity: Identity = Depends(get_current_identity)): ...
    """
    resolver: IdentityResolver = request.app.state.identity_resolver
    identity = resolver.resolve(request.headers.get("Authorization"))
    if identity is None:
        raise HTTPException(
            status_code=401,
            detail=UNAUTHORIZED_DETAIL,
            headers={"WWW-Authenticate": _SCHEME},
        )
    request.state.identity = identity
    return identity
