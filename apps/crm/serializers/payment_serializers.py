"""
Request serializers for payments and status changes.
"""
from rest_framework import serializers

from ..models import Movement, MovementPayment
from .movement_serializers import MovementItemSerializer


class RecordPaymentSerializer(serializers.Serializer):
    """
    Used for: POST /api/crm/movements/{id}/payments/
    """
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_method = serializers.ChoiceField(choices=MovementPayment.PAYMENT_METHODS)
    payment_reference = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class MovementStatusSerializer(serializers.Serializer):
    """
    Used for: POST /api/crm/movements/{id}/status/

    `action` covers the consignment transitions; otherwise `status` is set.
    """
    ACTION_CONVERT = 'convert_to_sale'
    ACTION_RETURN = 'return'

    status = serializers.ChoiceField(choices=Movement.STATUS_CHOICES, required=False)
    action = serializers.ChoiceField(choices=[ACTION_CONVERT, ACTION_RETURN], required=False)
    delivery_date = serializers.DateField(required=False, allow_null=True)
    returned_items = MovementItemSerializer(many=True, required=False)

    def validate(self, attrs):
        if not attrs.get('status') and not attrs.get('action'):
            raise serializers.ValidationError("Provide a status or an action")
        if 'returned_items' in attrs:
            attrs['returned_items'] = [
                {key: str(value) if key == 'unit_price' else value for key, value in item.items()}
                for item in attrs['returned_items']
            ]
        return attrs
