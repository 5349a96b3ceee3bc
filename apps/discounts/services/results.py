"""
Inputs and typed outcomes of the discount engine.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from apps.common.ledger import Rejection


class Reasons:
    NOT_FOUND = 'not_found'
    INACTIVE = 'inactive'
    NOT_YET_ACTIVE = 'not_yet_active'
    EXPIRED = 'expired'
    USAGE_EXHAUSTED = 'usage_exhausted'
    BELOW_MINIMUM = 'below_minimum'
    REQUIRES_LOGIN = 'requires_login'
    NOT_ALLOWED = 'not_allowed'
    NOT_FIRST_PURCHASE = 'not_first_purchase'
    LIMIT_REACHED = 'limit_reached'
    NO_ELIGIBLE_ITEMS = 'no_eligible_items'
    INVALID_AMOUNT = 'invalid_amount'


MESSAGES = {
    Reasons.NOT_FOUND: 'Invalid discount code',
    Reasons.INACTIVE: 'This code is not active',
    Reasons.NOT_YET_ACTIVE: 'This code is not available yet',
    Reasons.EXPIRED: 'This code has expired',
    Reasons.USAGE_EXHAUSTED: 'This code has reached its usage limit',
    Reasons.BELOW_MINIMUM: 'Cart total is below the minimum purchase for this code',
    Reasons.REQUIRES_LOGIN: 'You must be logged in to use this code',
    Reasons.NOT_ALLOWED: 'This code is not enabled for your account',
    Reasons.NOT_FIRST_PURCHASE: 'Only valid on a first purchase',
    Reasons.LIMIT_REACHED: 'You have already used this code',
    Reasons.NO_ELIGIBLE_ITEMS: 'This code does not apply to the products in your cart',
    Reasons.INVALID_AMOUNT: 'The discount is not valid',
}


def reject(reason, **details):
    return Rejection(reason=reason, message=MESSAGES.get(reason, ''), details=details)


@dataclass(frozen=True)
class Requester:
    user_id: Optional[int] = None
    email: Optional[str] = None

    @property
    def is_authenticated(self):
        return self.user_id is not None


@dataclass(frozen=True)
class CartItem:
    product_id: str
    subtotal: Decimal


@dataclass(frozen=True)
class Cart:
    total: Decimal
    items: List[CartItem] = field(default_factory=list)


@dataclass(frozen=True)
class DiscountValidation:
    valid: bool
    discount_amount: Decimal = Decimal('0')
    eligible_subtotal: Decimal = Decimal('0')
    discount_code: object = None
    rejection: Optional[Rejection] = None

    @property
    def reason(self):
        return self.rejection.reason if self.rejection else None

    @classmethod
    def failed(cls, reason, discount_code=None, **details):
        return cls(valid=False, discount_code=discount_code, rejection=reject(reason, **details))


@dataclass(frozen=True)
class RedemptionResult:
    success: bool
    already_applied: bool = False
    redemption: object = None
    rejection: Optional[Rejection] = None

    @property
    def reason(self):
        return self.rejection.reason if self.rejection else None
