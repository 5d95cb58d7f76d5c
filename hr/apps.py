from django.apps import AppConfig

class HrConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hr"
    verbose_name = "HR"

    def ready(self):
        # Load signal receivers once the app registry is ready
        from . import signals  # noqa
