import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hr", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Goal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("target_value", models.FloatField(default=0)),
                ("current_value", models.FloatField(default=0)),
                ("unit", models.CharField(default="$", max_length=16)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("deadline", models.DateField(blank=True, null=True)),
                ("status", models.CharField(
                    choices=[
                        ("not_started", "Not Started"),
                        ("in_progress", "In Progress"),
                        ("completed", "Completed"),
                    ],
                    db_index=True,
                    default="not_started",
                    max_length=16,
                )),
                ("priority", models.CharField(
                    choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")],
                    default="medium",
                    max_length=8,
                )),
                ("metrics", models.JSONField(blank=True, default=dict)),
                ("assigned_to", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="goals",
                    to="hr.employee",
                )),
                ("set_by", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="goals_set",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "db_table": "perf_goal",
                "ordering": ("-updated_at",),
                "permissions": [("report_goal_achievement", "Can report goal achievements")],
                "indexes": [
                    models.Index(fields=["assigned_to", "updated_at"], name="perf_goal_assignee_upd_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        check=(models.Q(deadline__isnull=True) | models.Q(start_date__isnull=True)
                               | models.Q(start_date__lte=models.F("deadline"))),
                        name="chk_goal_dates",
                    ),
                ],
            },
        ),
    ]
