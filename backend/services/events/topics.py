"""Event topic names."""

ACCOUNT_CREATED = "account-created"
ACCOUNT_UPDATED = "account-updated"

TOPICS = frozenset({ACCOUNT_CREATED, ACCOUNT_UPDATED})
