"""Password hashing helpers."""

import bcrypt

from taskapi.core.config import get_settings


def hash_password(password: str) -> str:
    """Hash a plain password with a fresh salt; the result embeds salt and cost."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
