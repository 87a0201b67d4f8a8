"""
Store-level exceptions for the weekend app.

These surface straight through DRF, so each one carries its HTTP status.
Domain errors raised by the mutation services live in
``apps.weekend.services.exceptions``.
"""
from rest_framework.exceptions import APIException


class DocumentStoreError(APIException):
    """Backing key-value store unreachable or document unreadable."""
    status_code = 500
    default_detail = 'The weekend document could not be read or written.'
    default_code = 'document_store_error'


class ConcurrentUpdateError(APIException):
    """Document changed between read and write (compare-and-set mode only)."""
    status_code = 409
    default_detail = 'The weekend was changed by someone else. Please try again.'
    default_code = 'concurrent_update'
