"""
Movement serializers for list, detail and create operations.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import Movement, MovementPayment
from ..services import is_overdue

User = get_user_model()


class MovementItemSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    variant_id = serializers.CharField(max_length=64, required=False, allow_null=True, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False)


class MovementPaymentSerializer(serializers.ModelSerializer):
    payment_method_display = serializers.CharField(source='get_payment_method_display', read_only=True)

    class Meta:
        model = MovementPayment
        fields = [
            'id', 'amount', 'payment_method', 'payment_method_display',
            'payment_reference', 'notes', 'recorded_by', 'created_at'
        ]
        read_only_fields = fields


class MovementListSerializer(serializers.ModelSerializer):
    """
    Serializer for movement list view.
    Used for: GET /api/crm/movements/
    """
    movement_type_display = serializers.CharField(source='get_movement_type_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    remaining_balance = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    is_overdue = serializers.SerializerMethodField()

    class Meta:
        model = Movement
        fields = [
            'id', 'movement_number', 'movement_type', 'movement_type_display',
            'customer', 'counterparty_name', 'total_amount', 'amount_paid',
            'remaining_balance', 'status', 'status_display', 'is_overdue',
            'due_date', 'delivery_date', 'created_at'
        ]
        read_only_fields = fields

    def get_is_overdue(self, obj):
        return is_overdue(obj, self.context.get('as_of'))


class MovementSerializer(MovementListSerializer):
    """
    Serializer for movement detail view, with items and payments.
    Used for: GET /api/crm/movements/{id}/
    """
    payments = MovementPaymentSerializer(many=True, read_only=True)

    class Meta(MovementListSerializer.Meta):
        fields = MovementListSerializer.Meta.fields + ['items', 'notes', 'created_by', 'updated_at', 'payments']
        read_only_fields = fields


class DebtSerializer(MovementListSerializer):
    """Open debt row with the paid total summed from payments"""
    total_paid = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    remaining = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta(MovementListSerializer.Meta):
        fields = MovementListSerializer.Meta.fields + ['total_paid', 'remaining']
        read_only_fields = fields


class MovementCreateSerializer(serializers.Serializer):
    """
    Used for: POST /api/crm/movements/
    """
    movement_type = serializers.ChoiceField(choices=Movement.MOVEMENT_TYPES)
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    counterparty_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    items = MovementItemSerializer(many=True, required=False)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    due_date = serializers.DateField(required=False, allow_null=True)
    delivery_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_customer_id(self, value):
        if value is not None and not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Customer not found")
        return value

    def validate(self, attrs):
        if 'total_amount' not in attrs and not attrs.get('items'):
            raise serializers.ValidationError("Provide items or a total_amount")
        # JSONField storage: keep item prices as strings
        attrs['items'] = [
            {key: str(value) if key == 'unit_price' else value for key, value in item.items()}
            for item in attrs.get('items', [])
        ]
        return attrs
