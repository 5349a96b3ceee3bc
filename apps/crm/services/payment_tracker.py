"""
Partial payments against movements and the derived debt state.
"""
import logging
from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.common.ledger import audit, insert_once, invariant_violation, lock
from ..models import Movement, MovementPayment
from .results import PaymentResult, Reasons

logger = logging.getLogger(__name__)


def local_day(as_of=None):
    """Calendar day of `as_of` in the configured TIME_ZONE, which is the calendar due dates use."""
    as_of = as_of or timezone.now()
    if not isinstance(as_of, datetime):
        return as_of
    if timezone.is_naive(as_of):
        return as_of.date()
    return timezone.localdate(as_of)


def is_overdue(movement, as_of=None):
    """
    True once the due date has passed with money still owed. Derived on
    every read and never written back to the movement.
    """
    if movement.due_date is None or movement.status == Movement.STATUS_PAID:
        return False
    return local_day(as_of) > movement.due_date and movement.remaining_balance > 0


def derive_status(movement):
    if movement.remaining_balance == 0:
        return Movement.STATUS_PAID
    if movement.amount_paid > 0:
        return Movement.STATUS_PARTIAL_PAID
    return movement.status


class PaymentTracker:
    """Records payments and keeps a movement's paid amount and status in step"""

    @staticmethod
    @transaction.atomic
    def record_payment(movement_id, amount, payment_method=MovementPayment.METHOD_CASH,
                       payment_reference=None, recorded_by=None, notes=''):
        """
        Apply a payment to a movement.

        With a non-empty `payment_reference`, replaying the same payment
        returns the current state with `already_recorded=True`.
        """
        amount = Decimal(amount)
        if amount <= 0:
            return PaymentResult.failed(Reasons.INVALID_AMOUNT)

        try:
            movement = lock(Movement.objects, pk=movement_id)
        except Movement.DoesNotExist:
            return PaymentResult.failed(Reasons.NOT_FOUND)

        payment_reference = (payment_reference or '').strip() or None
        if payment_reference:
            existing = movement.payments.filter(payment_reference=payment_reference).first()
            if existing:
                logger.info(f"Payment {payment_reference} already recorded on {movement}")
                return PaymentResult.for_movement(movement, existing, already_recorded=True)

        remaining = movement.remaining_balance
        if amount > remaining:
            return PaymentResult.failed(
                Reasons.AMOUNT_EXCEEDS_BALANCE,
                amount=str(amount), remaining_balance=str(remaining)
            )

        values = {
            'amount': amount,
            'payment_method': payment_method,
            'recorded_by': recorded_by,
            'notes': notes or '',
        }
        if payment_reference:
            payment, created = insert_once(
                MovementPayment, {'movement': movement, 'payment_reference': payment_reference}, values
            )
            if not created:
                return PaymentResult.for_movement(movement, payment, already_recorded=True)
        else:
            payment = MovementPayment.objects.create(movement=movement, **values)

        paid = movement.payments.aggregate(total=Sum('amount'))['total'] or Decimal('0')
        if paid > movement.total_amount:
            invariant_violation(
                'movement paid amount exceeds total',
                movement=movement.pk, paid=paid, total=movement.total_amount
            )

        movement.amount_paid = paid
        movement.status = derive_status(movement)
        movement.save(update_fields=['amount_paid', 'status', 'updated_at'])

        audit('movement.payment', movement=movement.movement_number, amount=amount,
              method=payment_method, reference=payment_reference, remaining=movement.remaining_balance)
        return PaymentResult.for_movement(movement, payment)
