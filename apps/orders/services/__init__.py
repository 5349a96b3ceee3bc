"""
Order services module.
"""
from .order_payment_service import OrderPaymentService

__all__ = [
    'OrderPaymentService',
]
