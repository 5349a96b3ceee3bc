"""
Order serializers.
"""
from rest_framework import serializers
from ..models import Order


class OrderSerializer(serializers.ModelSerializer):
    discount_code = serializers.CharField(source='discount_code.code', read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'user', 'email', 'total_amount', 'status',
            'is_business', 'discount_code', 'discount_amount', 'discount_rejection',
            'points_earned', 'created_at', 'paid_at'
        ]
        read_only_fields = fields
