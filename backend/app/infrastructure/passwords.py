"""Password Hashing — bcrypt hashing and verification for the credential store.

Invariants:
    - Plaintext passwords never leave this module (never logged, never persisted)
    - Hashes are self-describing bcrypt strings (salt and cost embedded)

Design Decisions:
    - bcrypt library directly, default cost 12; the hash string embeds salt and cost
    - Cost configurable via settings so tests run with the minimum (4)
"""

import bcrypt


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError:
        return False
