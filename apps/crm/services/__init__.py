"""
Movement and payment services module.
"""
from .movement_service import MovementService
from .payment_tracker import PaymentTracker, is_overdue
from .results import MovementResult, PaymentResult, Reasons

__all__ = [
    'MovementService',
    'PaymentTracker',
    'is_overdue',
    'MovementResult',
    'PaymentResult',
    'Reasons',
]
