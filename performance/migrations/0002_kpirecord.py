import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("hr", "0001_initial"),
        ("performance", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="KpiRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("metric", models.CharField(db_index=True, max_length=255)),
                ("value", models.FloatField(default=0)),
                ("recorded_at", models.DateField(default=django.utils.timezone.localdate)),
                ("employee", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="kpi_records",
                    to="hr.employee",
                )),
            ],
            options={
                "db_table": "perf_kpi_record",
                "ordering": ("-recorded_at", "-id"),
                "indexes": [
                    models.Index(fields=["employee", "recorded_at"], name="perf_kpi_emp_rec_idx"),
                ],
            },
        ),
    ]
