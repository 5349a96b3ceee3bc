"""
Internal endpoints used by order processing and operators.
"""
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.common.utils import invalid_input_response, rejection_response, success_response
from ..services import PointsService
from ..serializers import PointsAdjustmentSerializer, PointsAwardSerializer


def _user_missing(user_id):
    if get_user_model().objects.filter(pk=user_id).exists():
        return None
    return Response({
        'success': False,
        'message': 'User not found'
    }, status=status.HTTP_404_NOT_FOUND)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def internal_award_points(request):
    """Award points for a paid order. Repeat calls for the same order award nothing."""
    serializer = PointsAwardSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)

    data = serializer.validated_data
    missing = _user_missing(data['user_id'])
    if missing:
        return missing

    awarded = PointsService.award_points(data['user_id'], data['order_id'], data['total_amount'])
    return success_response({
        'points_awarded': awarded,
        'points_balance': PointsService.get_balance(data['user_id'])
    })


@api_view(['POST'])
@permission_classes([IsAdminUser])
def internal_adjust_points(request):
    serializer = PointsAdjustmentSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)

    data = serializer.validated_data
    missing = _user_missing(data['user_id'])
    if missing:
        return missing

    result = PointsService.adjust_points(data['user_id'], data['points'], data['reason'])
    if not result.success:
        return rejection_response(result.rejection)
    return success_response({
        'points_change': result.points,
        'points_balance': result.balance,
        'transaction_id': result.transaction.id
    })
