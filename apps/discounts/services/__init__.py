"""
Discount services module.
"""
from .discount_calculator import DiscountCalculator
from .discount_service import DiscountService
from .results import Cart, CartItem, DiscountValidation, Reasons, RedemptionResult, Requester

__all__ = [
    'DiscountCalculator',
    'DiscountService',
    'Cart',
    'CartItem',
    'DiscountValidation',
    'Reasons',
    'RedemptionResult',
    'Requester',
]
