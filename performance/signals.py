# performance/signals.py
"""
Signals:
- Object permissions on a new goal (django-guardian):
  the user who set it may view/change/delete it,
  the assignee's user may view it and report achievements on it.
"""

from django.db.models.signals import post_save
from django.dispatch import receiver
from guardian.shortcuts import assign_perm

from performance.models import Goal


@receiver(post_save, sender=Goal)
def grant_goal_perms(sender, instance, created, **kwargs):
    if not created:
        return

    setter = getattr(instance, "set_by", None)
    if setter:
        assign_perm("performance.view_goal", setter, instance)
        assign_perm("performance.change_goal", setter, instance)
        assign_perm("performance.delete_goal", setter, instance)

    assignee_user = getattr(instance.assigned_to, "user", None)
    if assignee_user:
        assign_perm("performance.view_goal", assignee_user, instance)
        assign_perm("performance.report_goal_achievement", assignee_user, instance)
