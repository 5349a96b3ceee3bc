from django.conf import settings
from django.db import models
from django.db.models import Q


class MovementPayment(models.Model):
    """Immutable record of money received against a movement"""

    METHOD_CASH = 'cash'
    METHOD_TRANSFER = 'transfer'
    METHOD_CHECK = 'check'
    METHOD_CREDIT_CARD = 'credit_card'
    METHOD_OTHER = 'other'

    PAYMENT_METHODS = [
        (METHOD_CASH, 'Cash'),
        (METHOD_TRANSFER, 'Bank Transfer'),
        (METHOD_CHECK, 'Check'),
        (METHOD_CREDIT_CARD, 'Credit Card'),
        (METHOD_OTHER, 'Other'),
    ]

    movement = models.ForeignKey('crm.Movement', on_delete=models.PROTECT, related_name='payments')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHODS)
    # Stored as NULL when empty so only real references are unique per movement
    payment_reference = models.CharField(max_length=100, null=True, blank=True)
    notes = models.TextField(blank=True, default='')
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='recorded_movement_payments'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'movement_payments'
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name='movement_payment_positive'),
            models.UniqueConstraint(fields=['movement', 'payment_reference'], name='uniq_movement_payment_reference'),
        ]

    def __str__(self):
        return f"{self.movement} - {self.amount} ({self.get_payment_method_display()})"
