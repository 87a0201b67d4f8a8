"""Read access to the whole weekend document."""

from typing import Optional

from apps.weekend.models import WeekendData
from apps.weekend.store import DocumentStore, get_document_store


def get_weekend_data(*, store: Optional[DocumentStore] = None) -> WeekendData:
    """Current snapshot; the empty document if nothing was ever written."""
    store = store or get_document_store()
    return store.load()
