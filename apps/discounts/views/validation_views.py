"""
Cart-facing discount code validation.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from apps.common.utils import invalid_input_response, rejection_response, success_response
from ..serializers import DiscountValidationRequestSerializer
from ..services import DiscountService, Requester


@api_view(['POST'])
@permission_classes([AllowAny])
def validate_discount_code(request):
    """Validate a code against the caller's cart. Never consumes a use."""
    serializer = DiscountValidationRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)

    user = request.user
    requester = Requester(
        user_id=user.id if user.is_authenticated else None,
        email=(user.email if user.is_authenticated else None) or serializer.validated_data.get('email') or None,
    )
    result = DiscountService.validate(
        serializer.validated_data['code'], requester=requester, cart=serializer.to_cart()
    )

    if not result.valid:
        return rejection_response(result.rejection)

    return success_response({
        'valid': True,
        'code': result.discount_code.code,
        'discount_code_id': result.discount_code.id,
        'discount_type': result.discount_code.discount_type,
        'discount_amount': result.discount_amount,
        'eligible_subtotal': result.eligible_subtotal,
    })
