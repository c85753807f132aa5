"""Account persistence and profile services."""

from .profile import publish_account_event, update_profile
from .schemas import AccountPublic, ProfilePatch, account_event_body
from .store import PROFILE_FIELDS, AccountStore, normalize_email

__all__ = [
    "AccountPublic",
    "AccountStore",
    "PROFILE_FIELDS",
    "ProfilePatch",
    "account_event_body",
    "normalize_email",
    "publish_account_event",
    "update_profile",
]
