"""
Order-paid transition endpoint, called by the payment-provider webhook relay
and by the admin "confirm payment" action.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from ..models import Order
from ..serializers import OrderSerializer
from ..services import OrderPaymentService


@api_view(['POST'])
@permission_classes([IsAdminUser])
def mark_order_paid(request, order_number):
    """Run the order-paid transition for one order"""
    ok, message = OrderPaymentService.process_payment_success(order_number)
    if not ok:
        code = status.HTTP_404_NOT_FOUND if message == "Order not found" else status.HTTP_400_BAD_REQUEST
        return Response({
            'success': False,
            'message': message
        }, status=code)

    order = Order.objects.get(order_number=order_number)
    return Response({
        'success': True,
        'message': message,
        'data': OrderSerializer(order).data
    })
