"""
Discount views module.
"""
from .validation_views import validate_discount_code
from .admin_views import discount_codes, discount_code_detail, discount_code_redemptions

__all__ = [
    'validate_discount_code',
    'discount_codes',
    'discount_code_detail',
    'discount_code_redemptions',
]
