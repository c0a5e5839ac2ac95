"""Password hashing for user credentials.

Uses bcrypt with a per-hash random salt. Verification goes through
bcrypt's own checkpw, which compares in constant time.
"""

import bcrypt

DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes; newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def _encode(secret: str) -> bytes:
    return secret.encode()[:MAX_PASSWORD_BYTES]


def hash_password(secret: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt.

    Args:
        secret: The plaintext password to hash
        rounds: bcrypt work factor (log2 of the iteration count)

    Returns:
        The bcrypt hash as a string
    """
    return bcrypt.hashpw(_encode(secret), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(secret: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison.

    Args:
        secret: The plaintext password to verify
        password_hash: The bcrypt hash to verify against

    Returns:
        True if the password matches the hash, False otherwise
    """
    try:
        return bcrypt.checkpw(_encode(secret), password_hash.encode())
    except Exception:
        # Return False for any error (invalid hash format, etc.)
        return False
