from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
from .services import PointsService


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_points_account_for_new_user(sender, instance, created, **kwargs):
    """Open an empty points account for new users"""
    if created and not kwargs.get('raw'):
        PointsService.get_or_create_account(instance.pk)
