from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone


def health_check(request):
    """Liveness probe that also touches the database."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        database = 'ok'
    except DatabaseError:
        database = 'unavailable'

    return JsonResponse({
        'status': 'ok' if database == 'ok' else 'degraded',
        'database': database,
        'time': timezone.now().isoformat(),
    }, status=200 if database == 'ok' else 503)


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
