import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    """SHA-256 first so passwords longer than bcrypt's 72-byte input limit still count in full."""
    return hashlib.sha256(password.encode("utf-8")).digest()


def hash_password(password: str, *, rounds: int = 12) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Returns False for a wrong password or a malformed stored hash."""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
