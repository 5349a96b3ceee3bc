from django.conf import settings
from django.db import models


class PointsTransaction(models.Model):
    """Immutable points ledger entry; the sum per user is the balance"""

    TYPE_EARNING = 'earning'
    TYPE_REDEMPTION = 'redemption'
    TYPE_ADJUSTMENT = 'adjustment'

    TRANSACTION_TYPES = [
        (TYPE_EARNING, 'Points Earned'),
        (TYPE_REDEMPTION, 'Points Redeemed'),
        (TYPE_ADJUSTMENT, 'Manual Adjustment'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='points_transactions')
    order_id = models.CharField(max_length=64, blank=True, null=True)
    transaction_type = models.CharField(max_length=20, choices=TRANSACTION_TYPES)
    points_change = models.IntegerField()  # Positive for earning, negative for redemption
    balance_after = models.IntegerField()
    reason = models.CharField(max_length=200, blank=True, default='')
    # Set to order_id on earning rows only; NULLs never collide, so this
    # unique column allows at most one award per order on every backend
    award_order_id = models.CharField(max_length=64, null=True, blank=True, unique=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'points_transactions'
        ordering = ['-created_at', '-id']
        verbose_name = 'Points Transaction'
        verbose_name_plural = 'Points Transactions'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='points_txn_user_created_idx'),
            models.Index(fields=['order_id'], name='points_txn_order_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.points_change} points ({self.get_transaction_type_display()})"

    @property
    def is_earning(self):
        return self.points_change > 0

    @property
    def is_spending(self):
        return self.points_change < 0
