"""Security utilities for the admin area."""

import base64
import hashlib
import hmac

from src.storefront.runtime.config.config_data import AdminConfig
from src.storefront.runtime.context import get_config


def hash_password(password: str) -> str:
    """Hash a password the way ``admin.hashed_password`` is stored.

    Returns:
        Base64 encoded SHA-512 digest of the UTF-8 password
    """
    digest = hashlib.sha512(password.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def is_valid_password(password: str, hashed_password: str) -> bool:
    """Compare a plain password with a stored digest in constant time."""
    if not hashed_password:
        return False
    return hmac.compare_digest(hash_password(password), hashed_password)


def is_admin(username: str, password: str, admin: AdminConfig | None = None) -> bool:
    """Check HTTP Basic credentials against the admin account.

    Args:
        username: Username sent by the client
        password: Password sent by the client
        admin: Admin account to check against; defaults to the active configuration

    Returns:
        True if both match the admin account
    """
    admin = admin or get_config().admin
    username_ok = hmac.compare_digest(username.encode("utf-8"), admin.username.encode("utf-8"))
    password_ok = is_valid_password(password, admin.hashed_password)
    return username_ok and password_ok
