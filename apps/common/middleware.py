"""
Error handling middleware for requests that escape the DRF exception handler
"""

import logging
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from .exceptions import LedgerInvariantError, storage_error_response

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(MiddlewareMixin):
    """
    Error handling middleware that prevents information leakage
    """

    def process_exception(self, request, exception):
        """Handle exceptions securely"""
        if not request.path.startswith('/api/'):
            return None  # Let Django handle non-API errors normally

        if isinstance(exception, DatabaseError):
            logger.error(f"Storage failure in {request.path}: {exception}", exc_info=True)
            return JsonResponse(storage_error_response(), status=503)

        if isinstance(exception, LedgerInvariantError):
            # Already reported on ledger.alerts
            logger.error(f"Invariant violation in {request.path}: {exception}")
        else:
            logger.error(f"Exception in {request.path}: {str(exception)}", exc_info=True)

        return JsonResponse({
            'code': 500,
            'msg': 'Internal server error',
            'data': None
        }, status=500)
