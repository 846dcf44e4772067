from django.db import connections
from django.http import JsonResponse


def healthz(request):
    """Liveness probe: one database round trip.

    Cache statistics are only served to signed-in users at
    ``/api/debug/cache-stats``.
    """
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except Exception as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1)})
