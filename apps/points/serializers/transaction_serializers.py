"""
Points transaction serializers.
"""
from rest_framework import serializers
from ..models import PointsTransaction


class PointsTransactionSerializer(serializers.ModelSerializer):
    """
    Serializer for points ledger entries.
    Used for: GET /api/points/transactions/
    """
    transaction_type_display = serializers.CharField(source='get_transaction_type_display', read_only=True)

    class Meta:
        model = PointsTransaction
        fields = [
            'id', 'transaction_type', 'transaction_type_display', 'points_change',
            'balance_after', 'order_id', 'reason', 'created_at'
        ]
        read_only_fields = fields
