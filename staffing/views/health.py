from django.db import DatabaseError, connections
from django.http import JsonResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from ..responses import ok


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return ok({'status': 'ok'})


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        return JsonResponse({'success': True, 'db': bool(row and row[0] == 1)})
    except DatabaseError as e:
        return JsonResponse({'success': False, 'message': str(e)}, status=500)
