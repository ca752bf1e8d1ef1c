"""
Password hashing helpers.
Passwords are stored as Argon2 hashes and never compared in plaintext.
"""

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """
    Hash a password with Argon2 (random salt per call).

    Args:
        password (str): The plaintext password.

    Returns:
        str: Encoded Argon2 hash, including its parameters and salt.
    """
    return ph.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """
    Check a submitted password against a stored hash in constant time.

    Args:
        password_hash (str): Hash from the users table.
        password (str): Password submitted by the client.

    Returns:
        bool: True on match. False on mismatch, a non-string password,
        or an unreadable hash.
    """
    if not password_hash or not isinstance(password, str):
        return False
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
