# -*- coding: utf-8 -*-
from django.apps import AppConfig

class PerformanceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "performance"
    verbose_name = "Performance"

    def ready(self):
        # Register signal receivers once the app registry is ready
        from . import signals  # noqa: F401
