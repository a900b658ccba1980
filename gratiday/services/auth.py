"""Password hashing and verification.

Hashes are stored as ``"<salt>:<hash>"``: a hex salt from 16 random bytes and
the hex PBKDF2-HMAC-SHA512 key derived from it.
"""

import secrets

from passlib.crypto.digest import pbkdf2_hmac
from passlib.utils import consteq

HASH_DIGEST = "sha512"
HASH_ROUNDS = 1000
HASH_KEY_LENGTH = 64
SALT_BYTES = 16


def _derive(password: str, salt: str) -> str:
    return pbkdf2_hmac(HASH_DIGEST, password, salt, HASH_ROUNDS, HASH_KEY_LENGTH).hex()


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh random salt."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{salt}:{_derive(password, salt)}"


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash."""
    if not hashed_password or ":" not in hashed_password:
        return False
    salt, expected = hashed_password.split(":", 1)
    return consteq(_derive(plain_password, salt), expected)
