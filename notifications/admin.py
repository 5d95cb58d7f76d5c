from django.contrib import admin
from .models import Notification
from base.admin_mixins import AppAdmin


@admin.register(Notification)
class NotificationAdmin(AppAdmin):
    list_display = ("id", "user", "type", "short_message", "is_read", "created_at")
    list_filter = ("type", "is_read", "created_at")
    search_fields = ("message", "user__email")
    list_select_related = ("user",)
    autocomplete_fields = ("user",)
    actions = ("mark_selected_read",)

    def short_message(self, obj):
        txt = (obj.message or "")[:80]
        return txt + ("…" if len(obj.message or "") > 80 else "")

    @admin.action(description="Mark selected notifications as read")
    def mark_selected_read(self, request, queryset):
        updated = queryset.filter(is_read=False).update(is_read=True)
        self.message_user(request, f"{updated} notification(s) marked as read.")
