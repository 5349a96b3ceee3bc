"""
Discount code serializers for operator CRUD.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import DiscountCode, DiscountRedemption

User = get_user_model()


class DiscountCodeSerializer(serializers.ModelSerializer):
    """
    Read serializer for discount codes, including allow-lists.
    Used for: GET /api/discounts/codes/
    """
    discount_type_display = serializers.CharField(source='get_discount_type_display', read_only=True)
    product_ids = serializers.SerializerMethodField()
    user_ids = serializers.SerializerMethodField()

    class Meta:
        model = DiscountCode
        fields = [
            'id', 'code', 'name', 'description', 'discount_type', 'discount_type_display',
            'discount_value', 'min_purchase_amount', 'max_discount_amount',
            'usage_limit', 'usage_count', 'per_user_limit', 'first_purchase_only',
            'starts_at', 'expires_at', 'is_active', 'product_ids', 'user_ids',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_product_ids(self, obj):
        return list(obj.product_restrictions.values_list('product_id', flat=True))

    def get_user_ids(self, obj):
        return list(obj.user_restrictions.values_list('user_id', flat=True))


class DiscountCodeWriteSerializer(serializers.ModelSerializer):
    """
    Input serializer for creating and updating codes.
    Used for: POST /api/discounts/codes/, PUT /api/discounts/codes/{id}/
    """
    product_ids = serializers.ListField(
        child=serializers.CharField(max_length=64), required=False, write_only=True
    )
    user_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, write_only=True
    )

    class Meta:
        model = DiscountCode
        fields = [
            'code', 'name', 'description', 'discount_type', 'discount_value',
            'min_purchase_amount', 'max_discount_amount', 'usage_limit', 'per_user_limit',
            'first_purchase_only', 'starts_at', 'expires_at', 'is_active',
            'product_ids', 'user_ids'
        ]

    def validate_code(self, value):
        normalized = DiscountCode.normalize(value)
        if not normalized:
            raise serializers.ValidationError("Code cannot be blank")
        clash = DiscountCode.objects.filter(code=normalized)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError("A discount code with this code already exists")
        return normalized

    def validate_discount_value(self, value):
        if value <= 0:
            raise serializers.ValidationError("Discount value must be positive")
        return value

    def validate_user_ids(self, value):
        found = set(User.objects.filter(pk__in=value).values_list('pk', flat=True))
        missing = sorted(set(value) - found)
        if missing:
            raise serializers.ValidationError(f"Unknown users: {missing}")
        return value

    def validate(self, attrs):
        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, None)

        discount_type = current('discount_type')
        discount_value = current('discount_value')
        if discount_type == DiscountCode.TYPE_PERCENTAGE and discount_value is not None \
                and discount_value > Decimal('100'):
            raise serializers.ValidationError({'discount_value': "Percentage cannot exceed 100"})
        if discount_type != DiscountCode.TYPE_PERCENTAGE and current('max_discount_amount') is not None:
            raise serializers.ValidationError(
                {'max_discount_amount': "Only percentage codes take a maximum discount"}
            )
        for name in ('min_purchase_amount', 'max_discount_amount'):
            value = current(name)
            if value is not None and value < 0:
                raise serializers.ValidationError({name: "Must not be negative"})

        usage_limit = current('usage_limit')
        usage_count = getattr(self.instance, 'usage_count', 0)
        if usage_limit is not None and usage_limit < usage_count:
            raise serializers.ValidationError(
                {'usage_limit': f"Code has already been used {usage_count} times"}
            )

        starts_at, expires_at = current('starts_at'), current('expires_at')
        if starts_at and expires_at and expires_at <= starts_at:
            raise serializers.ValidationError({'expires_at': "Must be after starts_at"})
        return attrs


class DiscountRedemptionSerializer(serializers.ModelSerializer):
    code = serializers.CharField(source='discount_code.code', read_only=True)

    class Meta:
        model = DiscountRedemption
        fields = ['id', 'code', 'order_id', 'user', 'amount_applied', 'created_at']
        read_only_fields = fields
