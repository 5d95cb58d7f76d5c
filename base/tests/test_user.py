import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.django_db


def test_create_user_normalizes_email_and_username():
    user = get_user_model().objects.create_user(email="Mona@Example.COM", password="pass-1234")

    assert user.email == "mona@example.com"
    assert user.username == "mona@example.com"
    assert user.role == "staff"
    assert user.check_password("pass-1234")
    assert user.display_name == "mona@example.com"


def test_create_user_requires_email():
    with pytest.raises(ValueError):
        get_user_model().objects.create_user(email="", password="x")


def test_create_superuser_gets_super_admin_role():
    user = get_user_model().objects.create_superuser(email="root@example.com", password="x")
    assert user.is_staff and user.is_superuser
    assert user.role == get_user_model().Role.SUPER_ADMIN
    assert user.is_admin_role


@pytest.mark.parametrize("role, expected", [
    ("super_admin", True),
    ("admin", True),
    ("leader", False),
    ("sub_leader", False),
    ("staff", False),
])
def test_is_admin_role(make_user, role, expected):
    assert make_user(role=role).is_admin_role is expected


def test_display_name_prefers_full_name(make_user):
    user = make_user(first_name="Mona", last_name="Adel")
    assert user.display_name == "Mona Adel"
    assert str(user) == "Mona Adel"


def test_login_lookup_is_case_insensitive(make_user):
    user = make_user("sara@example.com")
    assert get_user_model().objects.get_by_natural_key(" SARA@example.com ") == user
