"""
Movement models module.
"""
from .movement import Movement
from .payment import MovementPayment

__all__ = [
    'Movement',
    'MovementPayment',
]
