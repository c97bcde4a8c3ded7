"""
Purchase-confirmation notifications sent to shop owners.
"""

from __future__ import annotations

import logging

from relay.push import PushClient, PushNotification
from relay.users import UserStore

logger = logging.getLogger(__name__)

PURCHASE_CONFIRMED_TITLE = "🛍️ Nueva compra confirmada"
PURCHASE_CONFIRMED_BODY = "Un cliente confirmó una compra. Revisalo en tu panel."


def notify_purchase_confirmed(uid: str, *, users: UserStore, push: PushClient) -> bool:
    """
    Sends the purchase-confirmation push to the owner of `uid` via FCM.

    Users without a record, a push token, or a privileged plan are skipped.
    Never raises: this runs detached from the chat request that triggered it,
    so failures are only logged.

    Returns:
        bool: True if a notification was handed to the provider.
    """
    try:
        user = users.get_user(uid)
        if user is None or not user.is_notification_eligible:
            logger.info("User %s has no push token or no eligible plan; skipping", uid)
            return False

        push.send(
            PushNotification(
                title=PURCHASE_CONFIRMED_TITLE,
                body=PURCHASE_CONFIRMED_BODY,
                target_token=user.push_token,
            )
        )
        logger.info("Purchase notification sent for user %s", uid)
        return True
    except Exception:
        logger.exception("Failed to send purchase notification for user %s", uid)
        return False
