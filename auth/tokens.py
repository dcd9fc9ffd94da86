"""
auth/tokens.py -- JWT session token issuance and validation.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with the process-wide secret
       passed to TokenIssuer at startup and carry sub (account id), email, iat
       and exp. There is no server-side session record; a token is valid
       until exp and cannot be revoked earlier.

  Validation order: signature first (jose verifies it before returning any
       claims), then claim shape, then expiry. Expiry is checked here rather
       than inside jose so the clock is injectable and the leeway is exactly
       zero: a token is expired once now >= exp.

  Result values: validate() returns an Identity, TokenError.INVALID, or
       TokenError.EXPIRED. It never raises for bad input -- the resolver turns
       both error kinds into the same 401.

Layer rule: no imports from api/ or bookmarks/.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.models import Identity, TokenError

logger = logging.getLogger("bookmarks.auth")

_ALGORITHM = "HS256"

# Signature and claim shape are enforced by jose; expiry is enforced below
# against the injected clock.
_DECODE_OPTIONS = {"verify_exp": False, "verify_aud": False, "require_iat": True, "require_exp": True}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Signs and validates short-lived identity tokens.

    Args:
        secret_key:       HS256 signing key. Read once from Settings at startup.
        lifetime_seconds: Token lifetime; exp = iat + lifetime_seconds.
        clock:            Returns the current UTC time. Tests pass a fake.
    """

    def __init__(
        self,
        secret_key: str,
        lifetime_seconds: int = 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret_key:
            raise ValueError("TokenIssuer requires a non-empty secret_key")
        self._secret_key = secret_key
        self._lifetime = timedelta(seconds=lifetime_seconds)
        self._clock = clock

    @property
    def lifetime_seconds(self) -> int:
        return int(self._lifetime.total_seconds())

    def issue(self, subject_id: int, email: str) -> str:
        """Encode a signed JWT for the given account."""
        issued_at = self._clock()
        payload = {
            "sub": str(subject_id),
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def validate(self, token: str) -> Identity | TokenError:
        """Verify signature, then claims, then expiry."""
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM], options=_DECODE_OPTIONS)
        except JWTError:
            return TokenError.INVALID
        except (TypeError, ValueError, AttributeError):
            # Non-string or structurally broken input that jose does not wrap.
            return TokenError.INVALID

        identity = _claims_to_identity(claims)
        if identity is None:
            return TokenError.INVALID

        exp = claims["exp"]
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            return TokenError.INVALID
        if self._clock().timestamp() >= exp:
            return TokenError.EXPIRED
        return identity


def _claims_to_identity(claims: dict) -> Identity | None:
    sub = claims.get("sub")
    email = claims.get("email")
    if not isinstance(sub, str) or not sub.isdigit() or not isinstance(email, str):
        return None
    return Identity(subject_id=int(sub), email=email)
