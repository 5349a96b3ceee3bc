from django.conf import settings
from django.db import models


class DiscountRedemption(models.Model):
    """
    One applied discount on one order. Immutable; the (discount_code, order_id)
    pair is the idempotency key for redemption.
    """
    discount_code = models.ForeignKey('DiscountCode', on_delete=models.PROTECT, related_name='redemptions')
    order_id = models.CharField(max_length=64)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT,
        null=True, blank=True, related_name='discount_redemptions'
    )
    amount_applied = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'discount_redemptions'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['discount_code', 'order_id'], name='uniq_redemption_code_order'),
        ]
        indexes = [
            models.Index(fields=['discount_code', 'user'], name='discount_red_code_user_idx'),
        ]

    def __str__(self):
        return f"{self.discount_code_id} on order {self.order_id}: {self.amount_applied}"
