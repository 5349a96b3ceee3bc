"""
Movement serializers module.
"""
from .movement_serializers import (
    DebtSerializer, MovementCreateSerializer, MovementListSerializer,
    MovementPaymentSerializer, MovementSerializer
)
from .payment_serializers import MovementStatusSerializer, RecordPaymentSerializer

__all__ = [
    'DebtSerializer',
    'MovementCreateSerializer',
    'MovementListSerializer',
    'MovementPaymentSerializer',
    'MovementSerializer',
    'MovementStatusSerializer',
    'RecordPaymentSerializer',
]
