# hr/signals.py
from django.db.models.signals import post_save
from django.dispatch import receiver

from hr.models import Employee


@receiver(post_save, sender=Employee)
def fill_work_email_from_user(sender, instance: Employee, created, **kwargs):
    """An employee linked to a login inherits its email when none is set."""
    if instance.work_email or not instance.user_id:
        return
    email = getattr(instance.user, "email", "")
    if email:
        Employee.objects.filter(pk=instance.pk).update(work_email=email)
        instance.work_email = email
