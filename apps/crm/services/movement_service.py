"""
Movement lifecycle, debt listings and dashboard figures.
"""
import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum, Value
from django.db.models.functions import Coalesce

from apps.common.ledger import audit, lock
from ..models import Movement
from .payment_tracker import local_day
from .results import MovementResult, Reasons

logger = logging.getLogger(__name__)

MONEY = DecimalField(max_digits=12, decimal_places=2)
CENTS = Decimal('0.01')


def _overdue_filter(as_of=None):
    return (
        Q(due_date__lt=local_day(as_of))
        & Q(amount_paid__lt=F('total_amount'))
        & ~Q(status=Movement.STATUS_PAID)
    )


def _outstanding():
    return ExpressionWrapper(F('total_amount') - F('amount_paid'), output_field=MONEY)


class MovementService:
    """Service for movement operations"""

    @staticmethod
    def number_for(pk):
        prefix = settings.MOVEMENT_CONFIG.get('NUMBER_PREFIX', 'MOV')
        return f"{prefix}-{pk:06d}"

    @staticmethod
    @transaction.atomic
    def create_movement(data, created_by=None):
        """Create a pending movement and give it its sequential number."""
        data = dict(data)
        items = data.pop('items', []) or []
        total_amount = data.pop('total_amount', None)
        if total_amount is None:
            total_amount = sum(
                (Decimal(str(item['unit_price'])) * int(item['quantity']) for item in items),
                Decimal('0')
            )

        movement = Movement.objects.create(
            items=items,
            total_amount=total_amount,
            status=Movement.STATUS_PENDING,
            created_by=created_by,
            **data
        )
        movement.movement_number = MovementService.number_for(movement.pk)
        movement.save(update_fields=['movement_number'])

        audit('movement.created', movement=movement.movement_number,
              type=movement.movement_type, total=movement.total_amount)
        return movement

    @staticmethod
    def get_movement(movement_id):
        return (
            Movement.objects.select_related('customer', 'created_by')
            .prefetch_related('payments')
            .filter(pk=movement_id)
            .first()
        )

    @staticmethod
    @transaction.atomic
    def update_status(movement_id, status, delivery_date=None):
        """
        Move a movement to an operator-controlled status. Payment statuses
        come from the payment tracker and are refused here.
        """
        if status in Movement.DERIVED_STATUSES:
            return MovementResult.failed(Reasons.DERIVED_STATUS, status=status)
        if status not in dict(Movement.STATUS_CHOICES):
            return MovementResult.failed(Reasons.INVALID_STATUS, status=status)

        try:
            movement = lock(Movement.objects, pk=movement_id)
        except Movement.DoesNotExist:
            return MovementResult.failed(Reasons.NOT_FOUND)

        if movement.status == Movement.STATUS_PAID:
            return MovementResult.failed(Reasons.INVALID_TRANSITION, status=movement.status)

        movement.status = status
        update_fields = ['status', 'updated_at']
        if delivery_date:
            movement.delivery_date = delivery_date
            update_fields.append('delivery_date')
        movement.save(update_fields=update_fields)

        audit('movement.status', movement=movement.movement_number, status=status)
        return MovementResult(success=True, movement=movement)

    @staticmethod
    @transaction.atomic
    def convert_consignment_to_sale(movement_id):
        try:
            movement = lock(Movement.objects, pk=movement_id)
        except Movement.DoesNotExist:
            return MovementResult.failed(Reasons.NOT_FOUND)

        if movement.movement_type != Movement.TYPE_CONSIGNMENT or movement.status not in (
            Movement.STATUS_PENDING, Movement.STATUS_DELIVERED
        ):
            return MovementResult.failed(
                Reasons.INVALID_TRANSITION, movement_type=movement.movement_type, status=movement.status
            )

        movement.status = Movement.STATUS_SOLD
        movement.save(update_fields=['status', 'updated_at'])
        audit('movement.sold', movement=movement.movement_number)
        return MovementResult(success=True, movement=movement)

    @staticmethod
    @transaction.atomic
    def return_consignment(movement_id, returned_items=None):
        """Mark a consignment as returned, optionally recording which items came back."""
        try:
            movement = lock(Movement.objects, pk=movement_id)
        except Movement.DoesNotExist:
            return MovementResult.failed(Reasons.NOT_FOUND)

        if movement.movement_type != Movement.TYPE_CONSIGNMENT or movement.status in (
            Movement.STATUS_RETURNED, Movement.STATUS_SOLD, Movement.STATUS_PAID
        ):
            return MovementResult.failed(
                Reasons.INVALID_TRANSITION, movement_type=movement.movement_type, status=movement.status
            )
        if movement.payments.exists():
            return MovementResult.failed(Reasons.HAS_PAYMENTS)

        movement.status = Movement.STATUS_RETURNED
        update_fields = ['status', 'updated_at']
        if returned_items is not None:
            movement.items = returned_items
            update_fields.append('items')
        movement.save(update_fields=update_fields)

        audit('movement.returned', movement=movement.movement_number)
        return MovementResult(success=True, movement=movement)

    @staticmethod
    def list_movements(movement_type=None, status=None, customer_id=None, overdue_only=False, as_of=None):
        queryset = Movement.objects.select_related('customer')
        if movement_type:
            queryset = queryset.filter(movement_type=movement_type)
        if status:
            queryset = queryset.filter(status=status)
        if customer_id:
            queryset = queryset.filter(customer_id=customer_id)
        if overdue_only:
            queryset = queryset.filter(_overdue_filter(as_of))
        return queryset

    @staticmethod
    def get_debts(overdue_only=False, as_of=None):
        """
        Credit sales and consignments with money still owed, annotated with
        `total_paid` (summed from payments) and `remaining`.
        """
        queryset = (
            Movement.objects.select_related('customer')
            .filter(
                movement_type__in=Movement.DEBT_TYPES,
                status__in=Movement.OPEN_DEBT_STATUSES,
                amount_paid__lt=F('total_amount'),
            )
            .annotate(total_paid=Coalesce(Sum('payments__amount'), Value(Decimal('0')), output_field=MONEY))
            .annotate(remaining=ExpressionWrapper(F('total_amount') - F('total_paid'), output_field=MONEY))
            .order_by('due_date', 'id')
        )
        if overdue_only:
            queryset = queryset.filter(_overdue_filter(as_of))
        return queryset

    @staticmethod
    def get_debt_stats(as_of=None):
        """Debt totals and movement counts for the operator dashboard."""
        pending = Movement.objects.filter(
            movement_type__in=Movement.DEBT_TYPES
        ).exclude(
            status__in=[Movement.STATUS_PAID, Movement.STATUS_RETURNED]
        ).aggregate(total=Sum(_outstanding()))

        overdue = Movement.objects.filter(_overdue_filter(as_of)).aggregate(
            amount=Sum(_outstanding()), count=Count('id')
        )

        counts = Movement.objects.aggregate(
            samples=Count('id', filter=Q(movement_type=Movement.TYPE_SAMPLE)),
            consignments=Count('id', filter=Q(movement_type=Movement.TYPE_CONSIGNMENT)),
            sales=Count('id', filter=Q(movement_type__in=[Movement.TYPE_SALE_INVOICE, Movement.TYPE_SALE_CREDIT])),
        )

        return {
            'movements': counts,
            'debts': {
                'total_pending': Decimal(pending['total'] or 0).quantize(CENTS),
                'overdue_amount': Decimal(overdue['amount'] or 0).quantize(CENTS),
                'overdue_count': overdue['count'],
            }
        }
