from django.db import models
from django.conf import settings
from django.utils import timezone


class OrderQuerySet(models.QuerySet):

    def completed(self):
        return self.filter(status=Order.STATUS_PAID)

    def for_requester(self, user_id=None, email=None):
        """Orders placed by an authenticated user, or by a guest email."""
        if user_id:
            return self.filter(user_id=user_id)
        if email:
            return self.filter(email__iexact=email.strip())
        return self.none()


class Order(models.Model):
    """
    Order record as seen by the ledger. Cart building, shipping and rendering
    live elsewhere; this keeps only what discounts and points need.
    """

    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_CANCELLED = 'cancelled'
    STATUS_REFUNDED = 'refunded'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending Payment'),
        (STATUS_PAID, 'Paid'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_REFUNDED, 'Refunded'),
    ]

    order_number = models.CharField(max_length=50, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT,
        null=True, blank=True, related_name='orders',
        help_text="Null for guest checkout"
    )
    email = models.EmailField(blank=True, default='')
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, help_text="Amount charged after discounts")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    is_business = models.BooleanField(default=False, help_text="B2B orders do not earn points")

    discount_code = models.ForeignKey(
        'discounts.DiscountCode', on_delete=models.PROTECT,
        null=True, blank=True, related_name='orders'
    )
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    discount_rejection = models.CharField(
        max_length=30, blank=True, default='',
        help_text="Reason the attached code could not be redeemed at payment"
    )
    points_earned = models.IntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)
    paid_at = models.DateTimeField(null=True, blank=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='orders_user_status_idx'),
            models.Index(fields=['email', 'status'], name='orders_email_status_idx'),
        ]

    def __str__(self):
        return f"Order {self.order_number}"
