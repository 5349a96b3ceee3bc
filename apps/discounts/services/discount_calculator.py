"""
Discount amount calculation, one function per discount kind.
"""
from decimal import Decimal, ROUND_FLOOR

from ..models import DiscountCode


def percentage_discount(discount_code, eligible_subtotal):
    amount = (eligible_subtotal * discount_code.discount_value / Decimal('100')).to_integral_value(
        rounding=ROUND_FLOOR
    )
    if discount_code.max_discount_amount is not None:
        amount = min(amount, discount_code.max_discount_amount)
    return amount


def fixed_amount_discount(discount_code, eligible_subtotal):
    return min(discount_code.discount_value, eligible_subtotal)


class DiscountCalculator:
    """Compute the discount a code grants on an eligible subtotal"""

    CALCULATORS = {
        DiscountCode.TYPE_PERCENTAGE: percentage_discount,
        DiscountCode.TYPE_FIXED_AMOUNT: fixed_amount_discount,
    }

    @classmethod
    def calculate(cls, discount_code, eligible_subtotal):
        """Discount for `eligible_subtotal`; never more than the subtotal itself"""
        try:
            calculator = cls.CALCULATORS[discount_code.discount_type]
        except KeyError:
            raise ValueError(f"Unsupported discount type: {discount_code.discount_type}")
        eligible_subtotal = Decimal(eligible_subtotal)
        return min(calculator(discount_code, eligible_subtotal), eligible_subtotal)

    @staticmethod
    def eligible_subtotal(cart, allowed_product_ids):
        """Cart total, or the sum of allow-listed item subtotals when a list exists"""
        if not allowed_product_ids:
            return Decimal(cart.total)
        allowed = {str(product_id) for product_id in allowed_product_ids}
        return sum(
            (Decimal(item.subtotal) for item in cart.items if str(item.product_id) in allowed),
            Decimal('0'),
        )
