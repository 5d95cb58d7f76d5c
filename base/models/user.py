# base/models/user.py
from __future__ import annotations
from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from .mixins import TimeStampedMixin


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra):
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email).lower().strip()
        # AbstractUser still carries a username; derive one from the email when missing
        extra.setdefault("username", email)
        user = self.model(email=email, **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra):
        extra.setdefault("is_staff", False)
        extra.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra)

    def create_superuser(self, email, password=None, **extra):
        extra.setdefault("is_staff", True)
        extra.setdefault("is_superuser", True)
        extra.setdefault("role", User.Role.SUPER_ADMIN)
        return self._create_user(email, password, **extra)

    def get_by_natural_key(self, email):
        """Login and createsuperuser look users up by email."""
        return self.get(email__iexact=email.strip().lower())


class User(TimeStampedMixin, AbstractUser):
    """
    Dashboard user. Logs in with the email address; `role` drives what the
    dashboard lets the user see (admins see every goal, everyone else only the
    goals they hold object permissions on).
    """

    class Role(models.TextChoices):
        SUPER_ADMIN = "super_admin", "Super Admin"
        ADMIN = "admin", "Admin"
        LEADER = "leader", "Leader"
        SUB_LEADER = "sub_leader", "Sub-Leader"
        STAFF = "staff", "Staff"

    ADMIN_ROLES = (Role.SUPER_ADMIN, Role.ADMIN)

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STAFF, db_index=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        ordering = ("-date_joined",)

    @property
    def display_name(self) -> str:
        full = self.get_full_name().strip()
        return full or self.email

    @property
    def is_admin_role(self) -> bool:
        return self.is_superuser or self.role in self.ADMIN_ROLES

    def __str__(self):
        return self.display_name
