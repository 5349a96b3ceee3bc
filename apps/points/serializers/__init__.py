"""
Points serializers module.
"""
from .account_serializers import PointsAccountSerializer
from .transaction_serializers import PointsTransactionSerializer
from .redemption_serializers import (
    PointsAdjustmentSerializer, PointsAwardSerializer,
    PointsRedemptionSerializer, PointsSummarySerializer
)

__all__ = [
    'PointsAccountSerializer',
    'PointsTransactionSerializer',
    'PointsAdjustmentSerializer',
    'PointsAwardSerializer',
    'PointsRedemptionSerializer',
    'PointsSummarySerializer',
]
