"""
Operator management of discount codes.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.common.utils import invalid_input_response, paginate, success_response
from ..serializers import DiscountCodeSerializer, DiscountCodeWriteSerializer, DiscountRedemptionSerializer
from ..services import DiscountService


def _not_found():
    return Response({
        'success': False,
        'message': 'Discount code not found'
    }, status=status.HTTP_404_NOT_FOUND)


@api_view(['GET', 'POST'])
@permission_classes([IsAdminUser])
def discount_codes(request):
    """List codes (newest first) or create one"""
    if request.method == 'POST':
        serializer = DiscountCodeWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        discount_code = DiscountService.save_code(serializer.validated_data)
        return success_response(DiscountCodeSerializer(discount_code).data, status.HTTP_201_CREATED)

    is_active = request.GET.get('is_active')
    if is_active is not None:
        is_active = is_active.lower() in ('1', 'true', 'yes')
    queryset = DiscountService.list_codes(is_active=is_active, search=request.GET.get('search'))
    page, pagination = paginate(queryset, request)
    return success_response({
        'discount_codes': DiscountCodeSerializer(page, many=True).data,
        'pagination': pagination
    })


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdminUser])
def discount_code_detail(request, pk):
    discount_code = DiscountService.get_code(pk)
    if discount_code is None:
        return _not_found()

    if request.method == 'GET':
        return success_response(DiscountCodeSerializer(discount_code).data)

    if request.method == 'DELETE':
        outcome = DiscountService.delete_code(discount_code)
        return success_response({'result': outcome})

    serializer = DiscountCodeWriteSerializer(
        discount_code, data=request.data, partial=request.method == 'PATCH'
    )
    if not serializer.is_valid():
        return invalid_input_response(serializer.errors)
    discount_code = DiscountService.save_code(serializer.validated_data, instance=discount_code)
    return success_response(DiscountCodeSerializer(discount_code).data)


@api_view(['GET'])
@permission_classes([IsAdminUser])
def discount_code_redemptions(request, pk):
    """Redemption history for one code"""
    discount_code = DiscountService.get_code(pk)
    if discount_code is None:
        return _not_found()

    page, pagination = paginate(DiscountService.get_redemptions(discount_code), request)
    return success_response({
        'redemptions': DiscountRedemptionSerializer(page, many=True).data,
        'pagination': pagination
    })
