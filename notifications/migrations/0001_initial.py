import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(
                    choices=[
                        ("new_target", "New target"),
                        ("goal_updated", "Goal updated"),
                        ("general", "General"),
                    ],
                    default="general",
                    max_length=32,
                )),
                ("message", models.TextField(verbose_name="Message")),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("user", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="notifications",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "db_table": "notification",
                "ordering": ("-created_at", "-id"),
                "indexes": [models.Index(fields=["user", "is_read"], name="notif_user_read_idx")],
                "constraints": [
                    models.CheckConstraint(check=~models.Q(message=""), name="notif_message_not_empty"),
                ],
            },
        ),
    ]
