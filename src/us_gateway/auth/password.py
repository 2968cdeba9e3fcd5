"""Password hashing for stored user credentials (bcrypt >= 4).

Passwords arrive in plain text on create/update and are persisted only as
bcrypt hashes. Logins are checked upstream, never by this service.
"""

import bcrypt

# bcrypt rejects or silently truncates input beyond 72 bytes
BCRYPT_MAX_BYTES = 72


def hash_password(plain: str) -> str:
    """Hash a plain-text password. Returns a utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(
        plain.encode("utf-8")[:BCRYPT_MAX_BYTES], bcrypt.gensalt()
    )
    return hashed_bytes.decode("utf-8")
