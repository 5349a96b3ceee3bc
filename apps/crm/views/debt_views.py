"""
Debt listing and dashboard figures.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser

from apps.common.utils import paginate, success_response
from ..serializers import DebtSerializer
from ..services import MovementService


@api_view(['GET'])
@permission_classes([IsAdminUser])
def debts(request):
    """Open credit sales and consignments, soonest due first"""
    overdue_only = request.GET.get('overdue_only', '').lower() in ('1', 'true', 'yes')
    page, pagination = paginate(MovementService.get_debts(overdue_only=overdue_only), request)
    return success_response({
        'debts': DebtSerializer(page, many=True).data,
        'pagination': pagination
    })


@api_view(['GET'])
@permission_classes([IsAdminUser])
def debt_stats(request):
    stats = MovementService.get_debt_stats()
    debts_summary = stats['debts']
    return success_response({
        'movements': stats['movements'],
        'debts': {
            'total_pending': str(debts_summary['total_pending']),
            'overdue_amount': str(debts_summary['overdue_amount']),
            'overdue_count': debts_summary['overdue_count'],
        }
    })
