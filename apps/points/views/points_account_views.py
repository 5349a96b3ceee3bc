"""
Points account query views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import paginate, success_response
from ..services import PointsService
from ..serializers import PointsAccountSerializer, PointsSummarySerializer, PointsTransactionSerializer


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_balance(request):
    """Get user's current points balance"""
    account = PointsService.get_or_create_account(request.user.id)
    return success_response(PointsAccountSerializer(account).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_summary(request):
    """Get comprehensive points summary for user"""
    summary = PointsService.get_summary(request.user.id)
    return success_response(PointsSummarySerializer(summary).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_transactions(request):
    """Get user's points transaction history, newest first"""
    transactions = PointsService.get_transactions(request.user.id, request.GET.get('type'))
    page, pagination = paginate(transactions, request)
    return success_response({
        'transactions': PointsTransactionSerializer(page, many=True).data,
        'pagination': pagination
    })
