"""
Order serializers module.
"""
from .order_serializers import OrderSerializer

__all__ = [
    'OrderSerializer',
]
