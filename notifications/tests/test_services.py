import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from notifications import services
from notifications.models import Notification

pytestmark = pytest.mark.django_db


@pytest.fixture
def user(make_user):
    return make_user()


def test_notify_creates_unread_notification(user):
    notification = services.notify(user, Notification.Type.NEW_TARGET, "A new goal has been assigned: Week 41")

    assert notification.pk
    assert notification.is_read is False
    assert services.unread_count(user) == 1


def test_notify_without_user_is_a_no_op():
    assert services.notify(None, Notification.Type.GENERAL, "Hello") is None
    assert Notification.objects.count() == 0


def test_empty_message_is_rejected(user):
    with pytest.raises(ValidationError):
        services.notify(user, Notification.Type.GENERAL, "  ")


def test_notify_safely_logs_instead_of_raising(user, caplog):
    assert services.notify_safely(user, Notification.Type.GENERAL, "") is None
    assert "Could not create general notification" in caplog.text


def test_mark_as_read(user):
    notification = services.notify(user, Notification.Type.GENERAL, "Hello")
    services.mark_as_read(notification)

    notification.refresh_from_db()
    assert notification.is_read is True
    assert services.unread_count(user) == 0


def test_mark_all_and_clear_all_only_touch_one_user(user, make_user):
    other = make_user()
    for text in ("one", "two"):
        services.notify(user, Notification.Type.GENERAL, text)
    services.notify(other, Notification.Type.GENERAL, "other")

    assert services.mark_all_as_read(user) == 2
    assert services.mark_all_as_read(user) == 0
    assert services.unread_count(other) == 1

    assert services.clear_all(user) == 2
    assert Notification.objects.filter(user=other).count() == 1


def test_list_for_user_newest_first(user):
    first = services.notify(user, Notification.Type.GENERAL, "first")
    second = services.notify(user, Notification.Type.GENERAL, "second")

    assert list(services.list_for_user(user)) == [second, first]
    assert list(services.list_for_user(user, limit=1)) == [second]


def test_empty_message_is_rejected_by_the_database(user):
    notification = services.notify(user, Notification.Type.GENERAL, "Hello")
    with pytest.raises(IntegrityError), transaction.atomic():
        Notification.objects.filter(pk=notification.pk).update(message="")
