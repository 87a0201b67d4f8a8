import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.weekend.exceptions import DocumentStoreError
from apps.weekend.store import store_status

logger = logging.getLogger('apps.health')


@extend_schema(
    responses={200: None, 503: None},
    description="Liveness check, including the document store.",
    tags=['health'],
)
@api_view(['GET'])
def health_check(request):
    """Report whether the document store answers."""
    try:
        store = store_status()
    except DocumentStoreError:
        logger.exception("Document store unavailable")
        return Response(
            {'status': 'error', 'store': None},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    return Response({'status': 'ok', 'store': store})


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
