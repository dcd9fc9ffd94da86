"""
auth/service.py -- Signup and signin flows.

AuthService composes the hasher, the account store and the token issuer. All
three are passed in by the caller (the lifespan in api/main.py, or a test);
the service never builds its own collaborators or reads settings.

Both flows return an AuthOutcome instead of raising for user-visible failures:
  signup: CREDENTIALS_TAKEN when the store reports the email exists.
  signin: CREDENTIALS_MISMATCH for an unknown email AND for a wrong password.
          The two cases are indistinguishable to the caller, in body and in
          timing -- an unknown email still pays for one Argon2 verify.

Anything else (HashingError, database outage) propagates as an exception and
becomes a 500 in the API layer.

Both methods are blocking (Argon2 is CPU and memory bound). Call them from a
worker thread, which FastAPI does for plain `def` route handlers.
"""

from __future__ import annotations

import logging

from auth.models import AuthError, AuthOutcome
from auth.passwords import PasswordHasher
from auth.store import AccountStore
from auth.tokens import TokenIssuer

logger = logging.getLogger("bookmarks.auth")


class AuthService:
    def __init__(self, store: AccountStore, hasher: PasswordHasher, issuer: TokenIssuer) -> None:
        self._store = store
        self._hasher = hasher
        self._issuer = issuer

    def signup(self, email: str, password: str) -> AuthOutcome:
        """Create an account and return a session token for it."""
        digest = self._hasher.hash(password)
        account = self._store.create(email, digest)
        if account is None:
            logger.info("Signup rejected: email already registered")
            return AuthOutcome(error=AuthError.CREDENTIALS_TAKEN)
        return AuthOutcome(token=self._issuer.issue(account.id, account.email))

    def signin(self, email: str, password: str) -> AuthOutcome:
        """Verify credentials and return a session token."""
        account = self._store.find_by_email(email)
        if account is None:
            # Equalize timing -- do NOT return before running Argon2
            self._hasher.verify_dummy(password)
            logger.info("Signin failed")
            return AuthOutcome(error=AuthError.CREDENTIALS_MISMATCH)
        if not self._hasher.verify(account.password_hash, password):
            logger.info("Signin failed")
            return AuthOutcome(error=AuthError.CREDENTIALS_MISMATCH)
        logger.info("Signin succeeded (account_id=%s)", account.id)
        return AuthOutcome(token=self._issuer.issue(account.id, account.email))
