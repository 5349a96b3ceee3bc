"""
Custom exception handlers for consistent API responses
"""
from django.db import DatabaseError
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class LedgerInvariantError(RuntimeError):
    """
    A ledger invariant (non-negative balance, paid amount within total) was
    found broken. Signals a bug in validation order, never a user error.
    """

    def __init__(self, message, context=None):
        super().__init__(message)
        self.context = context or {}


def storage_error_response():
    """Retryable response for transient storage failures."""
    return {
        'code': status.HTTP_503_SERVICE_UNAVAILABLE,
        'msg': 'Temporary storage failure, retry the request',
        'retryable': True,
    }


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    if isinstance(exc, DatabaseError):
        # Every mutating ledger call is idempotent, so the whole request can be retried
        logger.error(f"Storage failure: {exc}", exc_info=True)
        return Response(storage_error_response(), status=status.HTTP_503_SERVICE_UNAVAILABLE)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        logger.warning(f"API Exception: {exc}")

        custom_response_data = {
            'code': response.status_code,
            'msg': 'An error occurred',
            'errors': response.data
        }

        # Handle specific error types
        if response.status_code == status.HTTP_400_BAD_REQUEST:
            custom_response_data['msg'] = 'Validation error'
        elif response.status_code == status.HTTP_401_UNAUTHORIZED:
            custom_response_data['msg'] = 'Authentication required'
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            custom_response_data['msg'] = 'Permission denied'
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            custom_response_data['msg'] = 'Resource not found'
        elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            custom_response_data['msg'] = 'Method not allowed'

        response.data = custom_response_data

    return response
