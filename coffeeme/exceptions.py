# exceptions.py
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
import logging
from django.conf import settings

logger = logging.getLogger(__name__)


class POSError(Exception):
    """
    Base class for business rule failures raised by the service layer.

    Services raise one of the subclasses and let it propagate, which aborts
    the surrounding transaction. The API layer maps the class to a status code.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'error'
    default_message = 'The request could not be completed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(POSError):
    """An id did not resolve to an existing record"""
    status_code = status.HTTP_404_NOT_FOUND
    code = 'not_found'
    default_message = 'Resource not found'


class ValidationError(POSError):
    """Input breaks a business rule: negative stock, bad enum, short stock"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'validation_error'
    default_message = 'Validation error'


class ConflictError(POSError):
    """Uniqueness or state conflict: duplicate SKU, occupied table, finished order"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'conflict'
    default_message = 'Request conflicts with the current state'


def custom_exception_handler(exc, context):
    """
    Custom exception handler for the POS API
    """
    if isinstance(exc, POSError):
        logger.info(f"{type(exc).__name__}: {exc.message}")
        return Response({
            'error': True,
            'message': exc.message,
            'details': {'code': exc.code},
            'status_code': exc.status_code
        }, status=exc.status_code)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        custom_response_data = {
            'error': True,
            'message': 'An error occurred',
            'details': response.data,
            'status_code': response.status_code
        }

        if response.status_code == 400:
            custom_response_data['message'] = 'Validation error'
        elif response.status_code == 404:
            custom_response_data['message'] = 'Resource not found'
        elif response.status_code == 405:
            custom_response_data['message'] = 'Method not allowed'
        elif response.status_code == 500:
            custom_response_data['message'] = 'Internal server error'

        response.data = custom_response_data

    # Handle Django ValidationError
    elif isinstance(exc, DjangoValidationError):
        logger.error(f"Validation Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Validation error',
            'details': {'non_field_errors': exc.messages},
            'status_code': 400
        }, status=status.HTTP_400_BAD_REQUEST)

    # A unique index caught a race the service-level check missed
    elif isinstance(exc, IntegrityError):
        logger.error(f"Integrity Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Database integrity error',
            'details': {'error': 'This operation violates database constraints'},
            'status_code': 400
        }, status=status.HTTP_400_BAD_REQUEST)

    else:
        logger.exception(f"Unexpected Error: {exc}", exc_info=exc)
        response = Response({
            'error': True,
            'message': 'An unexpected error occurred',
            'details': {'error': str(exc)} if settings.DEBUG else {},
            'status_code': 500
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return response
