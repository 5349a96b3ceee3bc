"""
Operator views for movements and their payments.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.common.utils import invalid_input_response, paginate, rejection_response, success_response
from ..serializers import (
    MovementCreateSerializer, MovementListSerializer, MovementSerializer,
    MovementStatusSerializer, RecordPaymentSerializer
)
from ..services import MovementService, PaymentTracker, Reasons


def _not_found():
    return Response({
        'success': False,
        'message': 'Movement not found'
    }, status=status.HTTP_404_NOT_FOUND)


def _flag(value):
    return value is not None and value.lower() in ('1', 'true', 'yes')


@api_view(['GET', 'POST'])
@permission_classes([IsAdminUser])
def movements(request):
    """List movements (newest first) or create one"""
    if request.method == 'POST':
        serializer = MovementCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        movement = MovementService.create_movement(serializer.validated_data, created_by=request.user)
        return success_response(MovementSerializer(movement).data, status.HTTP_201_CREATED)

    queryset = MovementService.list_movements(
        movement_type=request.GET.get('movement_type'),
        status=request.GET.get('status'),
        customer_id=request.GET.get('customer_id'),
        overdue_only=_flag(request.GET.get('overdue_only')),
    )
    page, pagination = paginate(queryset, request)
    return success_response({
        'movements': MovementListSerializer(page, many=True).data,
        'pagination': pagination
    })


@api_view(['GET'])
@permission_classes([IsAdminUser])
def movement_detail(request, pk):
    movement = MovementService.get_movement(pk)
    if movement is None:
        return _not_found()
    return success_response(MovementSerializer(movement).data)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def record_payment(request, pk):
    """Record a payment; a repeated payment_reference is acknowledged without a new row"""
    serializer = RecordPaymentSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)

    data = serializer.validated_data
    result = PaymentTracker.record_payment(
        pk,
        data['amount'],
        payment_method=data['payment_method'],
        payment_reference=data.get('payment_reference'),
        recorded_by=request.user,
        notes=data.get('notes', ''),
    )
    if not result.success:
        if result.reason == Reasons.NOT_FOUND:
            return _not_found()
        return rejection_response(result.rejection)

    return success_response({
        'payment_id': result.payment.id,
        'amount_paid': str(result.amount_paid),
        'remaining_balance': str(result.remaining_balance),
        'status': result.status,
        'already_recorded': result.already_recorded
    }, status.HTTP_200_OK if result.already_recorded else status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def update_movement_status(request, pk):
    serializer = MovementStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)

    data = serializer.validated_data
    action = data.get('action')
    if action == MovementStatusSerializer.ACTION_CONVERT:
        result = MovementService.convert_consignment_to_sale(pk)
    elif action == MovementStatusSerializer.ACTION_RETURN:
        result = MovementService.return_consignment(pk, data.get('returned_items'))
    else:
        result = MovementService.update_status(pk, data['status'], data.get('delivery_date'))

    if not result.success:
        if result.reason == Reasons.NOT_FOUND:
            return _not_found()
        return rejection_response(result.rejection)
    return success_response(MovementSerializer(result.movement).data)
