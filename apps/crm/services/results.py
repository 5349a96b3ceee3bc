"""
Typed outcomes of movement and payment operations.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from apps.common.ledger import Rejection


class Reasons:
    NOT_FOUND = 'not_found'
    INVALID_AMOUNT = 'invalid_amount'
    AMOUNT_EXCEEDS_BALANCE = 'amount_exceeds_balance'
    INVALID_STATUS = 'invalid_status'
    DERIVED_STATUS = 'derived_status'
    INVALID_TRANSITION = 'invalid_transition'
    HAS_PAYMENTS = 'has_payments'


MESSAGES = {
    Reasons.NOT_FOUND: 'Movement not found',
    Reasons.INVALID_AMOUNT: 'Payment amount must be greater than zero',
    Reasons.AMOUNT_EXCEEDS_BALANCE: 'Payment is larger than the remaining balance',
    Reasons.INVALID_STATUS: 'Unknown movement status',
    Reasons.DERIVED_STATUS: 'This status is set from recorded payments',
    Reasons.INVALID_TRANSITION: 'The movement cannot make this change in its current state',
    Reasons.HAS_PAYMENTS: 'The movement already has payments recorded',
}


def reject(reason, **details):
    return Rejection(reason=reason, message=MESSAGES.get(reason, ''), details=details)


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    amount_paid: Decimal = Decimal('0')
    remaining_balance: Decimal = Decimal('0')
    status: str = ''
    already_recorded: bool = False
    payment: object = None
    rejection: Optional[Rejection] = None

    @property
    def reason(self):
        return self.rejection.reason if self.rejection else None

    @classmethod
    def failed(cls, reason, **details):
        return cls(success=False, rejection=reject(reason, **details))

    @classmethod
    def for_movement(cls, movement, payment=None, already_recorded=False):
        return cls(
            success=True,
            amount_paid=movement.amount_paid,
            remaining_balance=movement.remaining_balance,
            status=movement.status,
            already_recorded=already_recorded,
            payment=payment,
        )


@dataclass(frozen=True)
class MovementResult:
    success: bool
    movement: object = None
    rejection: Optional[Rejection] = None

    @property
    def reason(self):
        return self.rejection.reason if self.rejection else None

    @classmethod
    def failed(cls, reason, **details):
        return cls(success=False, rejection=reject(reason, **details))
