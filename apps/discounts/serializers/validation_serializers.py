"""
Serializers for the cart-facing validate endpoint.
"""
from rest_framework import serializers

from ..services import Cart, CartItem


class CartItemSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class DiscountValidationRequestSerializer(serializers.Serializer):
    """
    Used for: POST /api/discounts/validate/
    """
    code = serializers.CharField(max_length=50, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    cart_total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    items = CartItemSerializer(many=True, required=False, default=list)

    def to_cart(self):
        data = self.validated_data
        return Cart(
            total=data['cart_total'],
            items=[CartItem(product_id=item['product_id'], subtotal=item['subtotal']) for item in data['items']],
        )
