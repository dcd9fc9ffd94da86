"""
auth/passwords.py -- Argon2id password hashing.

Security design decisions:
  Argon2id via argon2-cffi. It is memory-hard, so GPU/ASIC brute force of a
  stolen digest is expensive, and the encoded digest carries its own salt and
  cost parameters ($argon2id$v=19$m=...,t=...,p=...$salt$hash).

  Cost parameters are fixed at construction from Settings. They are never
  taken from request input.

  verify() never raises on bad input. A mismatch, a corrupted digest or a
  digest produced by another algorithm all return False. The comparison
  inside libargon2 is constant time, so response time does not depend on how
  much of the password matched.

  hash() failures (e.g. MemoryError while allocating the Argon2 memory block)
  are wrapped in HashingError. They are server faults and must surface as a
  500, never as a credential error.

Layer rule: no imports from api/ or bookmarks/.
"""

from __future__ import annotations

import logging

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import HashingError as _Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError

logger = logging.getLogger("bookmarks.auth")


class HashingError(RuntimeError):
    """Raised when a password cannot be hashed. Always an internal error."""


class PasswordHasher:
    """Salted, memory-hard hash + constant-time verify.

    Usage:
        hasher = PasswordHasher(time_cost=3, memory_cost=65536, parallelism=4)
        digest = hasher.hash("secret1")
        hasher.verify(digest, "secret1")   # True
    """

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4) -> None:
        self._ph = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )
        # Computed once so signin can run a full verify when the email is
        # unknown (timing equalization, see AuthService.signin).
        self._dummy_hash = self.hash("bookmarks_timing_dummy")

    def hash(self, plaintext: str) -> str:
        """Return an Argon2id digest with a fresh random salt."""
        try:
            return self._ph.hash(plaintext)
        except (_Argon2HashingError, MemoryError) as exc:
            logger.error("Password hashing failed: %s", type(exc).__name__)
            raise HashingError("password hashing failed") from exc

    def verify(self, digest: str, plaintext: str) -> bool:
        """Return True if plaintext matches digest; False on any failure."""
        try:
            return self._ph.verify(digest, plaintext)
        except (VerificationError, InvalidHashError):
            # VerifyMismatchError is a VerificationError subclass.
            return False
        except (TypeError, ValueError):
            return False

    def verify_dummy(self, plaintext: str) -> bool:
        """Burn one verify's worth of work against a digest nobody owns."""
        self.verify(self._dummy_hash, plaintext)
        return False
