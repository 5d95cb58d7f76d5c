# notifications/models.py

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """
    In-app notification shown in a user's notification bell.
    """

    class Type(models.TextChoices):
        NEW_TARGET = "new_target", _("New target")
        GOAL_UPDATED = "goal_updated", _("Goal updated")
        GENERAL = "general", _("General")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    type = models.CharField(max_length=32, choices=Type.choices, default=Type.GENERAL)
    message = models.TextField(_("Message"))
    is_read = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "notification"
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["user", "is_read"], name="notif_user_read_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                name="notif_message_not_empty",
                check=~models.Q(message=""),
            ),
        ]

    def clean(self):
        from django.core.exceptions import ValidationError
        super().clean()
        if not (self.message or "").strip():
            raise ValidationError({"message": "Message is required."})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"Notification<{self.id}> {self.type} for user {self.user_id}"
