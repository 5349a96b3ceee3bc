"""
Points account serializers.
"""
from rest_framework import serializers
from ..models import PointsAccount


class PointsAccountSerializer(serializers.ModelSerializer):
    """
    Serializer for the caller's balance.
    Used for: GET /api/points/balance/
    """

    class Meta:
        model = PointsAccount
        fields = ['points_balance', 'lifetime_earned', 'lifetime_redeemed', 'updated_at']
        read_only_fields = fields
