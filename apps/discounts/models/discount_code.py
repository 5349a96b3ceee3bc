from django.conf import settings
from django.db import models
from django.db.models import F, Q


class DiscountCode(models.Model):
    """Operator-managed discount code, matched case-insensitively by `code`"""

    TYPE_PERCENTAGE = 'percentage'
    TYPE_FIXED_AMOUNT = 'fixed_amount'

    DISCOUNT_TYPES = [
        (TYPE_PERCENTAGE, 'Percentage'),
        (TYPE_FIXED_AMOUNT, 'Fixed Amount'),
    ]

    code = models.CharField(max_length=50, unique=True, help_text="Stored uppercase")
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default='')

    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPES)
    discount_value = models.DecimalField(max_digits=12, decimal_places=2)
    min_purchase_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_discount_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        help_text="Cap for percentage codes"
    )

    usage_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Global redemption limit")
    usage_count = models.PositiveIntegerField(default=0)
    per_user_limit = models.PositiveIntegerField(null=True, blank=True)
    first_purchase_only = models.BooleanField(default=False)

    starts_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'discount_codes'
        ordering = ['-created_at']
        verbose_name = 'Discount Code'
        verbose_name_plural = 'Discount Codes'
        constraints = [
            models.CheckConstraint(
                condition=Q(usage_limit__isnull=True) | Q(usage_count__lte=F('usage_limit')),
                name='discount_usage_within_limit',
            ),
        ]

    def __str__(self):
        return f"{self.code} ({self.get_discount_type_display()} {self.discount_value})"

    @staticmethod
    def normalize(code):
        return (code or '').strip().upper()

    def save(self, *args, **kwargs):
        self.code = self.normalize(self.code)
        super().save(*args, **kwargs)

    @property
    def has_usage_left(self):
        return self.usage_limit is None or self.usage_count < self.usage_limit


class DiscountCodeProduct(models.Model):
    """Product allow-list entry. A code with no entries applies to the whole cart."""
    discount_code = models.ForeignKey(DiscountCode, on_delete=models.CASCADE, related_name='product_restrictions')
    product_id = models.CharField(max_length=64)

    class Meta:
        db_table = 'discount_code_products'
        constraints = [
            models.UniqueConstraint(fields=['discount_code', 'product_id'], name='uniq_discount_code_product'),
        ]

    def __str__(self):
        return f"{self.discount_code.code} -> product {self.product_id}"


class DiscountCodeUser(models.Model):
    """User allow-list entry. A code with entries requires a listed, logged-in user."""
    discount_code = models.ForeignKey(DiscountCode, on_delete=models.CASCADE, related_name='user_restrictions')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='discount_code_grants')

    class Meta:
        db_table = 'discount_code_users'
        constraints = [
            models.UniqueConstraint(fields=['discount_code', 'user'], name='uniq_discount_code_user'),
        ]

    def __str__(self):
        return f"{self.discount_code.code} -> user {self.user_id}"
