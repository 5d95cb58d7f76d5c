from __future__ import annotations
import logging
from typing import Iterable, Optional

from django.db import transaction

from .models import Notification

logger = logging.getLogger(__name__)


@transaction.atomic
def notify(user, type: str, message: str) -> Optional[Notification]:
    """Create a notification for `user`. No user, no notification."""
    if user is None:
        return None
    return Notification.objects.create(user=user, type=type, message=message)


def notify_safely(user, type: str, message: str) -> Optional[Notification]:
    """
    Same as notify() for callers whose own write must not fail because of a
    notification: errors are logged and None is returned.
    """
    try:
        return notify(user, type, message)
    except Exception:
        logger.exception("Could not create %s notification for user %s", type, getattr(user, "pk", None))
        return None


def mark_as_read(notification: Notification) -> Notification:
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read"])
    return notification


def mark_all_as_read(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)


def clear_all(user) -> int:
    deleted, _ = Notification.objects.filter(user=user).delete()
    return deleted


def unread_count(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


def list_for_user(user, limit: int = 50) -> Iterable[Notification]:
    return Notification.objects.filter(user=user).order_by("-created_at", "-id")[:limit]
