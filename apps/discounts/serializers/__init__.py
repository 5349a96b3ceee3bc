"""
Discount serializers module.
"""
from .discount_code_serializers import (
    DiscountCodeSerializer, DiscountCodeWriteSerializer, DiscountRedemptionSerializer
)
from .validation_serializers import CartItemSerializer, DiscountValidationRequestSerializer

__all__ = [
    'DiscountCodeSerializer',
    'DiscountCodeWriteSerializer',
    'DiscountRedemptionSerializer',
    'CartItemSerializer',
    'DiscountValidationRequestSerializer',
]
