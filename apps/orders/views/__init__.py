"""
Order views module.
"""
from .payment_views import mark_order_paid

__all__ = [
    'mark_order_paid',
]
