"""
Points redemption views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import invalid_input_response, rejection_response, success_response
from ..services import PointsCalculator, PointsService
from ..serializers import PointsRedemptionSerializer


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def redeem_points(request):
    """Spend the caller's points on an order"""
    serializer = PointsRedemptionSerializer(data=request.data)
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)

    result = PointsService.redeem_points(
        request.user.id,
        serializer.validated_data['order_id'],
        serializer.validated_data['points'],
    )
    if not result.success:
        return rejection_response(result.rejection)

    return success_response({
        'points_redeemed': result.points,
        'points_balance': result.balance,
        'discount_amount': str(PointsCalculator.value_of_points(result.points)),
        'transaction_id': result.transaction.id
    })
