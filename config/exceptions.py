"""
Project-wide DRF exception handler.

Every error body carries a human-readable ``error`` string. Validation
errors keep the per-field details under ``fields`` and name the invalid
fields in ``error``.
"""
from rest_framework.exceptions import ValidationError
from rest_framework.views import exception_handler


def _describe(detail):
    if isinstance(detail, dict):
        return ', '.join(
            f"{field}: {_describe(messages)}" for field, messages in detail.items()
        )
    if isinstance(detail, list):
        return ' '.join(_describe(message) for message in detail)
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'error': _describe(response.data),
            'fields': response.data,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    return response
