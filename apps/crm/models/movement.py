from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Movement(models.Model):
    """
    Goods handed to a customer outside the storefront: samples, consignments
    and invoiced or credit sales. `amount_paid` caches the sum of the
    movement's payments and is only written by the payment tracker.
    """

    TYPE_SAMPLE = 'sample'
    TYPE_CONSIGNMENT = 'consignment'
    TYPE_SALE_INVOICE = 'sale_invoice'
    TYPE_SALE_CREDIT = 'sale_credit'

    MOVEMENT_TYPES = [
        (TYPE_SAMPLE, 'Sample'),
        (TYPE_CONSIGNMENT, 'Consignment'),
        (TYPE_SALE_INVOICE, 'Sale (invoice)'),
        (TYPE_SALE_CREDIT, 'Sale (credit)'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_DELIVERED = 'delivered'
    STATUS_SOLD = 'sold'
    STATUS_PARTIAL_PAID = 'partial_paid'
    STATUS_PAID = 'paid'
    STATUS_RETURNED = 'returned'
    STATUS_OVERDUE = 'overdue'  # Legacy value; overdue is derived, never stored

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_DELIVERED, 'Delivered'),
        (STATUS_SOLD, 'Sold'),
        (STATUS_PARTIAL_PAID, 'Partially Paid'),
        (STATUS_PAID, 'Paid'),
        (STATUS_RETURNED, 'Returned'),
        (STATUS_OVERDUE, 'Overdue'),
    ]

    # Derived from payments; never set by hand
    DERIVED_STATUSES = (STATUS_PARTIAL_PAID, STATUS_PAID, STATUS_OVERDUE)
    DEBT_TYPES = (TYPE_SALE_CREDIT, TYPE_CONSIGNMENT)
    OPEN_DEBT_STATUSES = (STATUS_DELIVERED, STATUS_SOLD, STATUS_PARTIAL_PAID, STATUS_OVERDUE)

    movement_number = models.CharField(max_length=32, unique=True, null=True, blank=True, editable=False)
    movement_type = models.CharField(max_length=20, choices=MOVEMENT_TYPES)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT,
        null=True, blank=True, related_name='movements'
    )
    counterparty_name = models.CharField(max_length=200, blank=True, default='')
    items = models.JSONField(default=list, help_text="[{product_id, quantity, unit_price}]")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    amount_paid = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    due_date = models.DateField(null=True, blank=True)
    delivery_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    notes = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='created_movements'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'movements'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['movement_type', 'status'], name='movements_type_status_idx'),
            models.Index(fields=['due_date'], name='movements_due_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(total_amount__gte=0), name='movement_total_non_negative'),
            models.CheckConstraint(condition=Q(amount_paid__gte=0), name='movement_paid_non_negative'),
            models.CheckConstraint(
                condition=Q(amount_paid__lte=F('total_amount')), name='movement_paid_within_total'
            ),
        ]

    def __str__(self):
        return self.movement_number or f"Movement #{self.pk}"

    @property
    def remaining_balance(self):
        return Decimal(self.total_amount) - Decimal(self.amount_paid)
