"""
Movement views module.
"""
from .movement_views import movement_detail, movements, record_payment, update_movement_status
from .debt_views import debt_stats, debts

__all__ = [
    'movement_detail',
    'movements',
    'record_payment',
    'update_movement_status',
    'debt_stats',
    'debts',
]
