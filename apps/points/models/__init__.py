"""
Points models module.
"""
from .account import PointsAccount
from .transaction import PointsTransaction

__all__ = [
    'PointsAccount',
    'PointsTransaction',
]
