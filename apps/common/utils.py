"""
Common utility functions for API responses
"""
from rest_framework.response import Response
from rest_framework import status


def success_response(data=None, status_code=status.HTTP_200_OK):
    """
    Standard success envelope
    """
    return Response({
        'success': True,
        'data': data
    }, status=status_code)


def rejection_response(rejection, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Envelope for an expected domain rejection (see apps.common.ledger.Rejection)
    """
    response_data = {
        'success': False,
        'reason': rejection.reason,
        'message': rejection.message,
    }
    if rejection.details:
        response_data['details'] = rejection.details
    return Response(response_data, status=status_code)


def invalid_input_response(errors):
    return Response({
        'success': False,
        'message': 'Invalid input',
        'errors': errors
    }, status=status.HTTP_400_BAD_REQUEST)


def paginate(queryset, request, default_page_size=20):
    """
    Slice a queryset by ?page / ?page_size. Returns (items, pagination dict).
    """
    try:
        page = max(int(request.GET.get('page', 1)), 1)
        page_size = min(max(int(request.GET.get('page_size', default_page_size)), 1), 100)
    except (TypeError, ValueError):
        page, page_size = 1, default_page_size

    total = queryset.count()
    start = (page - 1) * page_size
    end = start + page_size
    return queryset[start:end], {
        'page': page,
        'page_size': page_size,
        'total': total,
        'has_next': end < total
    }
