"""
URL configuration for the KPI dashboard project.

The dashboard front end talks to its own API; this project only exposes the
Django admin for managing branches, teams, employees, goals and notifications.
"""
# kpi_dashboard/urls.py
from django.contrib import admin
from django.urls import path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(url="/admin/", permanent=False)),
    # Admin
    path("admin/", admin.site.urls),
]
