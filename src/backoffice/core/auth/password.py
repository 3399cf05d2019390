"""Password hashing utilities using bcrypt."""

import os

import bcrypt

from backoffice.core.exceptions import InvalidArgumentError

BCRYPT_SALT_ROUNDS = int(os.environ.get("BCRYPT_SALT_ROUNDS", "10"))

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = BCRYPT_SALT_ROUNDS) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor

    Returns:
        Bcrypt hash string

    Raises:
        InvalidArgumentError: The password is longer than 72 bytes as UTF-8.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InvalidArgumentError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(encoded, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    The comparison itself is constant time (bcrypt.checkpw). A malformed
    stored hash, or a candidate bcrypt refuses to read, counts as a
    mismatch.

    Args:
        plain_password: Plain text password to check
        hashed_password: Bcrypt hash to check against

    Returns:
        True if password matches hash
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False
