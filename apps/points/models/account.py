from django.db import models
from django.conf import settings
from django.db.models import Q


class PointsAccount(models.Model):
    """
    Cached points balance for a user. Derived from the user's
    PointsTransaction rows and only written in the same transaction that
    inserts one of them (see PointsService).
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='points_account')
    points_balance = models.IntegerField(default=0)
    lifetime_earned = models.IntegerField(default=0)  # Total points ever earned
    lifetime_redeemed = models.IntegerField(default=0)  # Total points ever redeemed
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'points_accounts'
        verbose_name = 'Points Account'
        verbose_name_plural = 'Points Accounts'
        constraints = [
            models.CheckConstraint(condition=Q(points_balance__gte=0), name='points_balance_non_negative'),
        ]

    def __str__(self):
        return f"{self.user} - {self.points_balance} points"
