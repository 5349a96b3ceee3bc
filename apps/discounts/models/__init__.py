"""
Discount models module.
"""
from .discount_code import DiscountCode, DiscountCodeProduct, DiscountCodeUser
from .redemption import DiscountRedemption

__all__ = [
    'DiscountCode',
    'DiscountCodeProduct',
    'DiscountCodeUser',
    'DiscountRedemption',
]
