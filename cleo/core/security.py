"""
Password hashing (bcrypt) and opaque identifier / secret generation.
"""

from __future__ import annotations

import hashlib
import secrets
import string
from datetime import datetime

from passlib.context import CryptContext

from cleo.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

KEY_ALPHABET = string.ascii_uppercase + string.digits


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time bcrypt check. A malformed hash counts as a mismatch."""
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── Identifiers ─────────────────────────────────────────────────────
def timestamp() -> str:
    """Local time as YYYYMMDDHHMMSS followed by microseconds."""
    return datetime.now().strftime("%Y%m%d%H%M%S%f")


def hash_string(subject: str) -> str:
    """Upper-case hex SHA-256 of *subject*."""
    return hashlib.sha256(subject.encode("utf-8")).hexdigest().upper()


def new_id(seed: str) -> str:
    """Opaque id derived from the current timestamp plus *seed*."""
    return hash_string(f"{timestamp()}{seed}")


def new_secret(seed: str) -> str:
    """Like :func:`new_id` but mixed with random bytes, for bearer secrets."""
    return hash_string(f"{seed}{timestamp()}{secrets.token_hex(16)}")


def generate_key(size: int) -> str:
    """Random signup-key secret of *size* characters from A-Z0-9."""
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(size))
