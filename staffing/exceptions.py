"""
API error types and the project wide DRF exception handler.

Every error leaves the API in the same envelope the dashboard expects::

    {"success": false, "message": "...", "errors": {...}}

Field validation failures and domain conflicts both use 422 so the
client can show them next to the form that caused them.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ConflictError(exceptions.APIException):
    """Double booking, overlapping leave or a duplicate unique value."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'The request conflicts with existing data.'
    default_code = 'conflict'


class ReferentialError(exceptions.APIException):
    """Deleting a row that other rows still point at."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'The record is still in use.'
    default_code = 'in_use'


def _message(data) -> str:
    if isinstance(data, dict) and 'detail' in data:
        return str(data['detail'])
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(
            exc.message_dict if hasattr(exc, 'error_dict') else {'non_field_errors': exc.messages}
        )

    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception('Unhandled error on %s %s', getattr(request, 'method', '-'), getattr(request, 'path', '-'))
        return Response(
            {'success': False, 'message': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        errors = resp.data if isinstance(resp.data, dict) else {'non_field_errors': resp.data}
        resp.data = {'success': False, 'message': 'Validation failed', 'errors': errors}
        resp.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return resp

    if isinstance(exc, (Http404, exceptions.NotFound)):
        resp.data = {'success': False, 'message': 'Resource not found'}
        return resp

    resp.data = {'success': False, 'message': _message(resp.data)}
    return resp
