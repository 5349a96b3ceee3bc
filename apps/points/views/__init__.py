"""
Points views module.
"""
from .points_account_views import (
    get_points_balance, get_points_summary, get_points_transactions
)
from .points_redemption_views import redeem_points
from .points_integration_views import internal_adjust_points, internal_award_points

__all__ = [
    'get_points_balance',
    'get_points_summary',
    'get_points_transactions',
    'redeem_points',
    'internal_adjust_points',
    'internal_award_points',
]
