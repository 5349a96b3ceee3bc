"""
Points redemption, award and adjustment request serializers.
"""
from rest_framework import serializers
from .transaction_serializers import PointsTransactionSerializer


class PointsRedemptionSerializer(serializers.Serializer):
    """
    Serializer for points redemption requests.
    Used for: POST /api/points/redeem/
    """
    order_id = serializers.CharField(max_length=64)
    points = serializers.IntegerField(help_text="Points to spend on the order")


class PointsAwardSerializer(serializers.Serializer):
    """
    Used for: POST /api/points/internal/award/
    """
    user_id = serializers.IntegerField()
    order_id = serializers.CharField(max_length=64)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class PointsAdjustmentSerializer(serializers.Serializer):
    """
    Used for: POST /api/points/internal/adjust/
    """
    user_id = serializers.IntegerField()
    points = serializers.IntegerField()
    reason = serializers.CharField(max_length=200)


class PointsSummarySerializer(serializers.Serializer):
    """Serializer for points summary response"""
    points_balance = serializers.IntegerField()
    lifetime_earned = serializers.IntegerField()
    lifetime_redeemed = serializers.IntegerField()
    points_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency_units_per_point = serializers.IntegerField()
    recent_transactions = PointsTransactionSerializer(many=True)
