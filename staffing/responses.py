from rest_framework import status as http_status
from rest_framework.response import Response

_MISSING = object()


def ok(data=_MISSING, message=None, status=http_status.HTTP_200_OK) -> Response:
    """``{"success": true, "data": ..., "message": ...}``; absent keys are left out."""
    body = {'success': True}
    if message is not None:
        body['message'] = message
    if data is not _MISSING:
        body['data'] = data
    return Response(body, status=status)


def created(data, message=None) -> Response:
    return ok(data, message, status=http_status.HTTP_201_CREATED)
