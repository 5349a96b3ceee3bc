"""
Health check views for the ledger server.
"""
from django.apps import apps
from django.http import JsonResponse
from django.utils import timezone
from django.views import View
from django.db import DatabaseError, connection
import time
import logging

logger = logging.getLogger(__name__)

# Tables that hold ledger state; the server cannot record anything without them
LEDGER_MODELS = [
    'discounts.DiscountCode',
    'discounts.DiscountRedemption',
    'points.PointsAccount',
    'points.PointsTransaction',
    'crm.Movement',
    'crm.MovementPayment',
]


class BasicHealthCheckView(View):
    """
    Health check for monitoring tools. No authentication.

    Reports database connectivity and whether every ledger table is present,
    so a deploy that skipped migrations shows up as unhealthy.
    """

    def get(self, request):
        start_time = time.time()

        health_response = {
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'version': '1.0.0'
        }

        db_status, db_error = self._check_database_health()
        health_response['database'] = db_status
        if db_error:
            logger.error(f"Database health check failed: {db_error}")
        else:
            health_response['ledger'] = self._check_ledger_tables()

        checks = [health_response['database'], health_response.get('ledger', {'status': 'healthy'})]
        if any(check['status'] != 'healthy' for check in checks):
            health_response['status'] = 'unhealthy'

        health_response['response_time_ms'] = round((time.time() - start_time) * 1000, 2)

        status_code = 200 if health_response['status'] == 'healthy' else 503
        return JsonResponse(health_response, status=status_code)

    def _check_database_health(self):
        """Returns (status dict, error message or None)."""
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as e:
            return {
                'status': 'unhealthy',
                'message': 'Database connection failed',
            }, str(e)
        return {
            'status': 'healthy',
            'message': 'Database connection successful'
        }, None

    def _check_ledger_tables(self):
        expected = [apps.get_model(label)._meta.db_table for label in LEDGER_MODELS]
        existing = set(connection.introspection.table_names())
        missing = [table for table in expected if table not in existing]
        if missing:
            logger.error(f"Ledger tables missing: {', '.join(missing)}")
            return {'status': 'unhealthy', 'tables': len(expected), 'missing': missing}
        return {'status': 'healthy', 'tables': len(expected), 'missing': []}
