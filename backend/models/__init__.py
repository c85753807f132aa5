"""SQLModel models package."""

from .account import SOCIAL_KEY_SEPARATOR, Account, build_social_key
from .role import Role

__all__ = [
    "Account",
    "Role",
    "SOCIAL_KEY_SEPARATOR",
    "build_social_key",
]
