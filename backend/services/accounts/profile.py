"""Self-service profile updates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models import Account
from services.errors import AccountNotFound, Forbidden, NotSignedIn
from services.events import ACCOUNT_UPDATED

from .schemas import ProfilePatch, account_event_body

if TYPE_CHECKING:
    from services.context import RequestContext

logger = logging.getLogger(__name__)


async def update_profile(
    context: RequestContext,
    target_account_id: str,
    patch: ProfilePatch,
) -> Account:
    """Apply ``patch`` to the requester's own account and announce it.

    The write is committed before ``account-updated`` is published, and a
    failed publication leaves the committed write in place.
    """
    requester = await context.get_current_user()
    if requester is None:
        raise NotSignedIn()
    if requester.id != target_account_id:
        raise Forbidden()

    changes = patch.changes()
    await context.store.update(target_account_id, changes)

    account = await context.store.find_by_id(target_account_id)
    if account is None:
        raise AccountNotFound()

    logger.info(
        "Profile updated",
        extra={"account_id": account.id, "fields": sorted(changes)},
    )
    publish_account_event(context, ACCOUNT_UPDATED, account)
    return account


def publish_account_event(context: RequestContext, topic: str, account: Account) -> None:
    try:
        delivered = context.broadcaster.publish(topic, account_event_body(account))
    except Exception as publish_error:
        logger.warning(
            "Failed to publish account event",
            extra={"topic": topic, "account_id": account.id},
            exc_info=publish_error,
        )
        return
    logger.debug(
        "Published account event",
        extra={"topic": topic, "account_id": account.id, "delivered": delivered},
    )
